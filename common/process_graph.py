"""
common/process_graph.py

Draws an operation's phases and steps as a left-to-right Graphviz flow.

- one cluster per phase, steps chained in their listed order
- the last step of a phase links to the first step of the next phase
- safety-critical steps get a thick red border
- `safety_only` / `department` filters drop steps; the chain is re-linked
  over whatever remains so the flow stays readable
"""

from typing import List, Optional, Sequence

import graphviz

from common.models import OperationType, ProcessStep

SAFETY_CRITICAL_BORDER = "#F87171"


def filter_steps(steps: Sequence[ProcessStep], safety_only: bool = False,
                 department: Optional[str] = None) -> List[ProcessStep]:
    return [
        step for step in steps
        if (not safety_only or step.is_safety_critical)
        and (department is None or step.department == department)
    ]


def departments_in(operation: OperationType) -> List[str]:
    """Departments involved in an operation, first-seen order."""
    seen = []
    for step in operation.steps:
        if step.department not in seen:
            seen.append(step.department)
    return seen


def find_step(operation: OperationType, step_id: str) -> Optional[ProcessStep]:
    for step in operation.steps:
        if step.id == step_id:
            return step
    return None


def build_process_graph(operation: OperationType, safety_only: bool = False,
                        department: Optional[str] = None) -> graphviz.Digraph:
    dot = graphviz.Digraph(comment=operation.name)
    dot.attr(rankdir="LR", compound="true", nodesep="0.3", ranksep="0.5")
    dot.attr("node", shape="box", style="rounded,filled", fontname="Arial", fontsize="10")
    dot.attr("edge", fontname="Arial", arrowsize="0.7")

    previous_id = None
    for index, phase in enumerate(operation.phases):
        steps = filter_steps(phase.steps, safety_only, department)
        if not steps:
            continue
        with dot.subgraph(name=f"cluster_{index}") as cluster:
            cluster.attr(label=phase.name, style="rounded,dashed", color="#9CA3AF", fontname="Arial")
            for step in steps:
                attrs = {"fillcolor": "white", "color": step.department_color, "penwidth": "1.5"}
                if step.is_safety_critical:
                    attrs.update(color=SAFETY_CRITICAL_BORDER, penwidth="3")
                label = f"{step.icon_glyph} {step.name}\n{step.department}"
                cluster.node(step.id, label=label, **attrs)
        for step in steps:
            if previous_id:
                dot.edge(previous_id, step.id)
            previous_id = step.id
    return dot
