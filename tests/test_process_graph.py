import pytest

from common.demo_data import DEMO_OPERATIONS
from common.models import OperationType
from common.process_graph import (
    SAFETY_CRITICAL_BORDER,
    build_process_graph,
    departments_in,
    filter_steps,
    find_step,
)


@pytest.fixture()
def scenic():
    return OperationType.from_row(DEMO_OPERATIONS[0])


def test_filter_steps(scenic):
    safety = filter_steps(scenic.steps, safety_only=True)
    assert all(s.is_safety_critical for s in safety)
    assert [s.id for s in safety][:2] == ["weather", "aircraft-prep"]

    commercial = filter_steps(scenic.steps, department="Commercial")
    assert [s.id for s in commercial][0] == "booking"
    assert filter_steps(scenic.steps) == list(scenic.steps)


def test_departments_first_seen(scenic):
    departments = departments_in(scenic)
    assert departments[:3] == ["Commercial", "Flight Operations", "Maintenance"]
    assert len(departments) == len(set(departments))


def test_find_step(scenic):
    assert find_step(scenic, "landing").name == "Landing Procedures"
    assert find_step(scenic, "nope") is None


def test_graph_has_cluster_per_phase_and_chain(scenic):
    source = build_process_graph(scenic).source
    assert source.count("subgraph cluster_") == len(scenic.phases)
    assert "rankdir=LR" in source
    # last step of one phase links to the first step of the next
    assert '"passenger-briefing" -> takeoff' in source
    assert SAFETY_CRITICAL_BORDER in source


def test_safety_only_graph_drops_routine_steps(scenic):
    source = build_process_graph(scenic, safety_only=True).source
    assert "booking" not in source
    assert "Weather Assessment" in source
    # Post-flight has no safety-critical steps, so its cluster is skipped
    assert source.count("subgraph cluster_") == 2
