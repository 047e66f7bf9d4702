"""
common/org_tree.py

Turns the flat `employees` table into the reporting tree for the
Organization page, and draws that tree with Graphviz.

The tree rules:
- exactly ONE employee has no manager (the root)
- every `manager_id` must point at an employee in the list
- ids are unique
- no reporting loops
A list that breaks any rule raises OrgStructureError with the reason, so
the page can tell the user which record to fix.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import graphviz

from common.models import Department, Employee, Position

DEFAULT_NODE_COLOR = "#1F77B4"


class OrgStructureError(ValueError):
    """The employee list does not form a single reporting tree."""


@dataclass
class OrgNode:
    employee: Employee
    children: List["OrgNode"] = field(default_factory=list)

    def walk(self):
        """Depth-first, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    @property
    def depth(self) -> int:
        if not self.children:
            return 0
        return 1 + max(child.depth for child in self.children)


def build_hierarchy(employees: Sequence[Employee]) -> OrgNode:
    """Builds the reporting tree. Children keep the input order."""
    if not employees:
        raise OrgStructureError("No employees to build an organization chart from.")

    nodes: Dict[str, OrgNode] = {}
    for employee in employees:
        if employee.id in nodes:
            raise OrgStructureError(f"Duplicate employee id '{employee.id}'.")
        nodes[employee.id] = OrgNode(employee)

    roots = [e for e in employees if e.manager_id is None]
    if len(roots) != 1:
        names = ", ".join(e.name for e in roots) or "none"
        raise OrgStructureError(f"Expected exactly one top-level employee, found {len(roots)} ({names}).")

    for employee in employees:
        if employee.manager_id is None:
            continue
        parent = nodes.get(employee.manager_id)
        if parent is None:
            raise OrgStructureError(
                f"{employee.name} reports to unknown manager id '{employee.manager_id}'."
            )
        parent.children.append(nodes[employee.id])

    root = nodes[roots[0].id]
    reached = sum(1 for _ in root.walk())
    if reached != len(employees):
        # Anyone not under the root is stuck in a reporting loop
        reachable = {n.employee.id for n in root.walk()}
        looped = [e.name for e in employees if e.id not in reachable]
        raise OrgStructureError(f"Reporting loop detected involving: {', '.join(looped)}.")
    return root


def group_employees(employees: Sequence[Employee], attribute: str) -> Dict[str, List[Employee]]:
    """The 'View by Department / Location' groupings, first-seen order."""
    groups: Dict[str, List[Employee]] = {}
    for employee in employees:
        key = getattr(employee, attribute) or "Unassigned"
        groups.setdefault(key, []).append(employee)
    return groups


def department_colors(departments: Sequence[Department]) -> Dict[str, str]:
    return {d.name: d.color for d in departments}


def position_for(employee: Employee, positions: Sequence[Position]) -> Optional[Position]:
    """Positions are matched to people by job title."""
    for position in positions:
        if position.title == employee.title:
            return position
    return None


def direct_reports(employee_id: str, employees: Sequence[Employee]) -> List[Employee]:
    return [e for e in employees if e.manager_id == employee_id]


def build_org_graph(root: OrgNode, colors: Optional[Dict[str, str]] = None,
                    highlight_id: Optional[str] = None) -> graphviz.Digraph:
    """Top-down org chart. Boxes are filled with the department colour."""
    colors = colors or {}
    dot = graphviz.Digraph(comment="Organization Chart")
    dot.attr(rankdir="TB", splines="ortho", nodesep="0.4", ranksep="0.6")
    dot.attr("node", shape="box", style="rounded,filled", fontname="Arial", fontsize="10",
             fontcolor="white", penwidth="0")
    dot.attr("edge", color="#999999", arrowhead="none")

    for node in root.walk():
        employee = node.employee
        label = f"{employee.name}\n{employee.title}\n{employee.department}"
        attrs = {"fillcolor": colors.get(employee.department, DEFAULT_NODE_COLOR)}
        if employee.id == highlight_id:
            attrs.update(penwidth="3", color="#111827")
        dot.node(employee.id, label=label, **attrs)
        for child in node.children:
            dot.edge(employee.id, child.employee.id)
    return dot
