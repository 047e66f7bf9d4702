import pytest

from common.demo_data import DEMO_AIRCRAFT, DEMO_OPERATIONS, DEMO_RISK_ASSESSMENTS
from common.models import (
    PLACEHOLDER_IMAGE_URL,
    Aircraft,
    Department,
    Employee,
    HazardRecord,
    InvalidRecordError,
    OperationType,
    rows_to_records,
)


def _hazard_row(**overrides):
    row = {
        "id": "risk-x",
        "hazard": "Wire strike",
        "description": "Unmarked power lines near landing sites",
        "consequences": ["Rotor damage"],
        "inherent_likelihood": 3,
        "inherent_severity": 5,
        "residual_likelihood": 2,
        "residual_severity": 4,
        "controls": [{"id": "c1", "description": "Wire maps"}],
        "responsible_person": "Chief Pilot",
        "monitoring_method": "Site surveys",
        "category": "Landing Sites",
    }
    row.update(overrides)
    return row


def test_hazard_from_row_snake_case():
    record = HazardRecord.from_row(_hazard_row())
    assert record.inherent_likelihood == 3
    assert record.controls[0].description == "Wire maps"
    assert record.consequences == ("Rotor damage",)
    assert record.to_row()["category"] == "Landing Sites"


def test_hazard_from_row_camel_case():
    row = {
        "id": "risk-y",
        "hazard": "Fatigue",
        "inherentLikelihood": 4,
        "inherentSeverity": "4",
        "residualLikelihood": 2.0,
        "residualSeverity": 3,
        "responsiblePerson": "Safety Manager",
        "monitoringMethod": "Duty time records",
        "controls": ["Rostering limits"],
    }
    record = HazardRecord.from_row(row)
    assert (record.inherent_likelihood, record.inherent_severity) == (4, 4)
    assert (record.residual_likelihood, record.residual_severity) == (2, 3)
    assert record.responsible_person == "Safety Manager"
    assert record.controls[0].id == "risk-y-control-1"
    assert record.category == "Uncategorised"


@pytest.mark.parametrize("field,value", [
    ("inherent_likelihood", 0),
    ("inherent_severity", 6),
    ("residual_likelihood", 2.5),
    ("residual_severity", "high"),
    ("residual_severity", None),
    ("inherent_likelihood", True),
    ("inherent_likelihood", "\u00b2"),
    ("residual_severity", "3.0"),
    ("inherent_severity", "-3"),
])
def test_hazard_rejects_bad_ratings(field, value):
    with pytest.raises(InvalidRecordError, match=field):
        HazardRecord.from_row(_hazard_row(**{field: value}))


def test_hazard_requires_id_and_label():
    with pytest.raises(InvalidRecordError):
        HazardRecord.from_row(_hazard_row(id=None))
    with pytest.raises(InvalidRecordError):
        HazardRecord.from_row(_hazard_row(hazard=""))


def test_hazard_record_is_immutable():
    record = HazardRecord.from_row(_hazard_row())
    with pytest.raises(AttributeError):
        record.inherent_likelihood = 1


def test_rows_to_records_collects_errors():
    rows = [_hazard_row(id="ok-1"), _hazard_row(id="bad", inherent_severity=9), _hazard_row(id="ok-2")]
    records, errors = rows_to_records(rows, HazardRecord)
    assert [r.id for r in records] == ["ok-1", "ok-2"]
    assert len(errors) == 1
    assert "bad" in errors[0]


def test_rows_to_records_skips_unparseable_ratings():
    records, errors = rows_to_records([_hazard_row(inherent_likelihood="\u00b2"), _hazard_row(id="ok")], HazardRecord)
    assert [r.id for r in records] == ["ok"]
    assert len(errors) == 1


def test_hazard_accepts_digit_strings():
    assert HazardRecord.from_row(_hazard_row(inherent_likelihood=" 4 ")).inherent_likelihood == 4


def test_demo_rows_are_all_valid():
    for rows, cls in (
        (DEMO_RISK_ASSESSMENTS, HazardRecord),
        (DEMO_AIRCRAFT, Aircraft),
        (DEMO_OPERATIONS, OperationType),
    ):
        records, errors = rows_to_records(rows, cls)
        assert errors == []
        assert len(records) == len(rows)


def test_aircraft_from_row_variants():
    aircraft = Aircraft.from_row({
        "id": 7,
        "type": "AS350",
        "registration": ["XU-101", "XU-102"],
        "baseLocations": ["Siem Reap"],
        "maintenance_info": {"inspections": [{"type": "Daily", "interval": "Every day"}]},
    })
    assert aircraft.id == "7"
    assert aircraft.registration == "XU-101, XU-102"
    assert aircraft.base_location == ("Siem Reap",)
    assert aircraft.maintenance.inspections[0].type == "Daily"
    assert aircraft.display_image == PLACEHOLDER_IMAGE_URL


def test_aircraft_round_trip_keeps_nested_fields():
    aircraft = Aircraft.from_row(DEMO_AIRCRAFT[0])
    row = aircraft.to_row()
    assert row["specifications"]["range"] == "710 km"
    assert row["maintenance"]["common_issues"][0] == "Tail rotor drive shaft bearing wear"
    assert Aircraft.from_row(row) == aircraft


def test_employee_manager_normalisation():
    assert Employee.from_row({"id": "1", "name": "A", "manager_id": ""}).manager_id is None
    assert Employee.from_row({"id": "2", "name": "B", "managerId": 1}).manager_id == "1"
    with pytest.raises(InvalidRecordError):
        Employee.from_row({"name": "No id"})


def test_department_default_colour():
    assert Department.from_row({"id": "d", "name": "Ops"}).color == "#1F77B4"
    assert Department.from_row({"id": "d", "name": "Ops", "departmentColor": "#000000"}).color == "#000000"


def test_operation_steps_flatten_in_order():
    operation = OperationType.from_row(DEMO_OPERATIONS[0])
    assert [p.name for p in operation.phases] == [
        "Pre-Flight Phase", "Flight Execution Phase", "Post-Flight Phase",
    ]
    ids = [s.id for s in operation.steps]
    assert ids[:2] == ["booking", "weather"]
    assert ids[-1] == "maintenance-feedback"
    weather = operation.steps[1]
    assert weather.is_safety_critical
    assert weather.icon_glyph == "⚠️"


@pytest.mark.parametrize("phases", [
    ["Pre-Flight Phase"],
    [{"name": "Pre-Flight Phase", "steps": ["booking"]}],
    [{"name": "Pre-Flight Phase", "steps": "booking"}],
])
def test_operation_rejects_malformed_phases(phases):
    with pytest.raises(InvalidRecordError, match="op-1"):
        OperationType.from_row({"id": "op-1", "name": "Charter", "phases": phases})

    records, errors = rows_to_records([{"id": "op-1", "phases": phases}, DEMO_OPERATIONS[0]], OperationType)
    assert [r.id for r in records] == [DEMO_OPERATIONS[0]["id"]]
    assert len(errors) == 1
