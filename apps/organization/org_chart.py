"""
apps/organization/org_chart.py

The Organization page: who reports to whom.

- "Chart" tab draws the reporting tree (Graphviz), boxes coloured by department
- "Directory" tab groups staff by department or location, with the
  position description (responsibilities, interfaces, authority limits)
  matched by job title
- "Manage" tab adds, edits and deletes employees

A staff list that does not form a single tree (two top-level people, a
manager id that does not exist, a loop) is reported instead of drawn.
"""

from datetime import datetime

import streamlit as st

from common.org_tree import (
    OrgStructureError,
    build_hierarchy,
    build_org_graph,
    department_colors,
    direct_reports,
    group_employees,
    position_for,
)

NO_MANAGER = "(none, top of the organization)"


class Page:
    def __init__(self, service):
        self.service = service

        self.meta = {
            "title_override": "Organization Chart",
            "last_updated": datetime.now().strftime("%Y-%m-%d %H:%M"),
            "data_source": f"{service.source_name} · employees",
            "coming_soon": False,
        }

        if "org_manage_action" not in st.session_state:
            st.session_state.org_manage_action = "Add"

        self.refresh_data()

    def refresh_data(self):
        self.employees = self.service.fetch_employees()
        self.departments = self.service.fetch_departments()
        self.positions = self.service.fetch_positions()
        self.colors = department_colors(self.departments)
        self.by_id = {e.id: e for e in self.employees}

    # --- TAB 1: CHART ---
    def _render_chart_tab(self):
        if not self.employees:
            st.info("No employees found. Use the 'Manage' tab to add the first one.")
            return

        try:
            root = build_hierarchy(self.employees)
        except OrgStructureError as e:
            st.error(f"The organization chart cannot be drawn: {e}")
            return

        c1, c2, c3 = st.columns(3)
        c1.metric("Employees", len(self.employees))
        c2.metric("Departments", len({e.department for e in self.employees}))
        c3.metric("Reporting levels", root.depth + 1)

        highlight_id = st.selectbox(
            "Highlight an employee",
            [None] + [e.id for e in self.employees],
            format_func=lambda eid: "None" if eid is None else f"{self.by_id[eid].name} · {self.by_id[eid].title}",
        )
        st.graphviz_chart(build_org_graph(root, self.colors, highlight_id=highlight_id), use_container_width=True)

        legend = st.columns(max(len(self.departments), 1))
        for col, department in zip(legend, self.departments):
            col.markdown(
                f"<span style='color:{department.color};font-size:1.2rem;'>■</span> {department.name}",
                unsafe_allow_html=True,
            )

        if highlight_id:
            self._render_employee_card(self.by_id[highlight_id])

    # --- TAB 2: DIRECTORY ---
    def _render_directory_tab(self):
        view_by = st.radio("View by", ["Department", "Location"], horizontal=True)
        groups = group_employees(self.employees, view_by.lower())

        for group_name, members in groups.items():
            with st.expander(f"{group_name} ({len(members)})", expanded=False):
                for employee in members:
                    self._render_employee_card(employee)

    def _render_employee_card(self, employee):
        st.markdown(f"**{employee.name}** · {employee.title}")
        manager = self.by_id.get(employee.manager_id)
        details = [employee.department, employee.location]
        if manager:
            details.append(f"reports to {manager.name}")
        st.caption(" · ".join(d for d in details if d))
        if employee.email or employee.phone:
            st.caption(" · ".join(d for d in (employee.email, employee.phone) if d))
        if employee.bio:
            st.write(employee.bio)

        reports = direct_reports(employee.id, self.employees)
        if reports:
            st.markdown("Direct reports: " + ", ".join(r.name for r in reports))

        position = position_for(employee, self.positions)
        if position:
            c1, c2 = st.columns(2)
            with c1:
                st.markdown("**Responsibilities**")
                for item in position.responsibilities:
                    st.markdown(f"- {item}")
            with c2:
                st.markdown("**Key interfaces**")
                for item in position.interfaces:
                    st.markdown(f"- {item}")
            if position.authority_limits:
                st.markdown(f"**Authority limits:** {position.authority_limits}")
        st.markdown("---")

    # --- TAB 3: MANAGE ---
    def _render_manage_tab(self):
        c1, c2, c3 = st.columns(3)
        if c1.button("➕ Add employee", use_container_width=True):
            st.session_state.org_manage_action = "Add"
        if c2.button("✏️ Edit employee", use_container_width=True):
            st.session_state.org_manage_action = "Edit"
        if c3.button("🗑️ Delete employee", use_container_width=True):
            st.session_state.org_manage_action = "Delete"

        action = st.session_state.org_manage_action
        st.markdown(f"### {action} employee")

        if action == "Add":
            self._render_employee_form(None)
            return

        if not self.employees:
            st.info("There are no employees yet.")
            return

        selected_id = st.selectbox(
            "Employee",
            [e.id for e in self.employees],
            format_func=lambda eid: f"{self.by_id[eid].name} · {self.by_id[eid].title}",
            key=f"org_{action.lower()}_select",
        )
        employee = self.by_id[selected_id]

        if action == "Edit":
            self._render_employee_form(employee)
        else:
            st.warning(f"This will permanently remove **{employee.name}**.")
            if st.button("Confirm delete", type="primary"):
                result = self.service.delete_employee(employee, self.employees)
                if result.ok:
                    st.session_state.org_manage_action = "Add"
                    st.rerun()

    def _render_employee_form(self, employee):
        department_names = [d.name for d in self.departments]
        if employee and employee.department not in department_names:
            department_names.append(employee.department)

        manager_options = [None] + [e.id for e in self.employees if not employee or e.id != employee.id]
        current_manager = employee.manager_id if employee else None
        if current_manager not in manager_options:
            current_manager = None

        with st.form(f"employee_form_{employee.id if employee else 'new'}"):
            c1, c2 = st.columns(2)
            name = c1.text_input("Name *", value=employee.name if employee else "")
            title = c2.text_input("Title *", value=employee.title if employee else "")
            department = c1.selectbox(
                "Department",
                department_names,
                index=department_names.index(employee.department) if employee else 0,
            )
            location = c2.text_input("Location", value=employee.location if employee else "")
            manager_id = c1.selectbox(
                "Reports to",
                manager_options,
                index=manager_options.index(current_manager),
                format_func=lambda eid: NO_MANAGER if eid is None else self.by_id[eid].name,
            )
            email = c2.text_input("Email", value=(employee.email or "") if employee else "")
            phone = c1.text_input("Phone", value=(employee.phone or "") if employee else "")
            bio = st.text_area("Bio", value=(employee.bio or "") if employee else "")

            submitted = st.form_submit_button("Save employee", type="primary")

        if submitted:
            form_data = {
                "name": name.strip(),
                "title": title.strip(),
                "department": department,
                "location": location.strip(),
                "manager_id": manager_id,
                "email": email.strip() or None,
                "phone": phone.strip() or None,
                "bio": bio.strip() or None,
            }
            result = self.service.save_employee(
                form_data, self.employees, employee_id=employee.id if employee else None,
            )
            if result.ok:
                st.rerun()

    # --- This is the "recipe" function that gets returned ---

    def render_body(self) -> None:
        tab_chart, tab_directory, tab_manage = st.tabs(["🏢 Chart", "📇 Directory", "⚙️ Manage"])

        with tab_chart:
            self._render_chart_tab()

        with tab_directory:
            self._render_directory_tab()

        with tab_manage:
            self._render_manage_tab()


# -----------------------------------------------------------------------------
# META HEADER DETAILS BACK TO MAIN
# -----------------------------------------------------------------------------

def render_page(service) -> (callable, dict):
    page = Page(service=service)
    return page.render_body, page.meta
