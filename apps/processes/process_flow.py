"""
apps/processes/process_flow.py

The Processes page: how each type of operation runs, phase by phase.

Pick an operation (scenic flight, charter, offshore transfer...) to see its
flow chart, optionally narrowed to safety-critical steps or a single
department, then pick a step for its procedure reference, safety points,
tools, paperwork and known issues.
"""

from datetime import datetime

import streamlit as st

from common.process_graph import build_process_graph, departments_in, filter_steps, find_step

ALL_DEPARTMENTS = "All departments"


class Page:
    def __init__(self, service):
        self.service = service

        self.meta = {
            "title_override": "Operational Processes",
            "last_updated": datetime.now().strftime("%Y-%m-%d %H:%M"),
            "data_source": f"{service.source_name} · operational_processes",
            "coming_soon": False,
        }

        self.refresh_data()

    def refresh_data(self):
        self.operations = self.service.fetch_operations()

    def _render_step_detail(self, step):
        st.markdown(f"#### {step.icon_glyph} {step.name}")
        if step.is_safety_critical:
            st.error("Safety-critical step", icon="⚠️")
        st.write(step.description)

        c1, c2 = st.columns(2)
        c1.markdown(f"**Department:** {step.department}")
        c1.markdown(f"**Responsible:** {step.personnel_responsible}")
        c2.markdown(f"**Procedure:** `{step.procedure_reference}`")
        if step.decision_authority:
            c2.markdown(f"**Decision authority:** {step.decision_authority}")

        for title, items in (
            ("Critical safety points", step.critical_safety_points),
            ("Tools used", step.tools_used),
            ("Documentation required", step.documentation_required),
            ("Common issues", step.common_issues),
        ):
            if items:
                st.markdown(f"**{title}**")
                for item in items:
                    st.markdown(f"- {item}")

    def render_body(self) -> None:
        if not self.operations:
            st.info("No operational processes have been defined yet.")
            return

        by_id = {op.id: op for op in self.operations}
        c1, c2, c3 = st.columns([2, 2, 1])
        operation_id = c1.selectbox(
            "Operation", list(by_id.keys()), format_func=lambda oid: by_id[oid].name,
        )
        operation = by_id[operation_id]

        department = c2.selectbox("Department", [ALL_DEPARTMENTS] + departments_in(operation))
        department = None if department == ALL_DEPARTMENTS else department
        safety_only = c3.toggle("Safety-critical only")

        visible = filter_steps(operation.steps, safety_only=safety_only, department=department)
        m1, m2, m3 = st.columns(3)
        m1.metric("Phases", len(operation.phases))
        m2.metric("Steps shown", f"{len(visible)} / {len(operation.steps)}")
        m3.metric("Safety-critical", sum(1 for s in operation.steps if s.is_safety_critical))

        if not visible:
            st.info("No steps match the current filters.")
            return

        st.graphviz_chart(
            build_process_graph(operation, safety_only=safety_only, department=department),
            use_container_width=True,
        )
        st.caption("Thick red border = safety-critical step. Border colour otherwise shows the department.")

        st.markdown("---")
        step_id = st.selectbox(
            "Step details",
            [s.id for s in visible],
            format_func=lambda sid: find_step(operation, sid).name,
        )
        self._render_step_detail(find_step(operation, step_id))


# -----------------------------------------------------------------------------
# META HEADER DETAILS BACK TO MAIN
# -----------------------------------------------------------------------------

def render_page(service) -> (callable, dict):
    page = Page(service=service)
    return page.render_body, page.meta
