"""
apps/fleet/fleet_gallery.py

The Fleet page: a card gallery of the operator's helicopters.

- cards show the image, type, registration and bases; "Details" opens the
  specifications, capabilities, equipment, inspections and known issues
- "Add aircraft" / "Edit" share one form; capabilities, equipment and base
  locations come from the dropdown_options reference table, and new
  reference values can be added from the form's side panel
- images are uploaded with the aircraft; replacing or deleting an aircraft
  cleans up its old image
"""

import os
from datetime import datetime

import pandas as pd
import streamlit as st

from common.fleet import ALLOWED_IMAGE_TYPES, form_from_aircraft, validate_aircraft_form

CARDS_PER_ROW = 3
EMPTY_FORM = {
    "type": "", "registration": "", "configuration": "",
    "passenger_capacity": "", "max_takeoff_weight": "", "max_cruise_speed": "",
    "range": "", "service_ceiling": "",
    "capabilities": [], "base_locations": [], "special_equipment": [],
    "inspections": [], "common_issues": "",
}
REFERENCE_LABELS = {"capability": "Capability", "equipment": "Special equipment", "location": "Base location"}


# --- Helper Functions (specific to this page) ---

def show_aircraft_image(aircraft):
    """Remote urls and local files are shown; anything else gets a placeholder tile."""
    url = aircraft.image_url
    if url and (url.startswith("http://") or url.startswith("https://") or os.path.exists(url)):
        st.image(url, use_container_width=True)
    else:
        st.markdown(
            "<div style='height:160px;display:flex;align-items:center;justify-content:center;"
            "background:#F3F4F6;border-radius:8px;font-size:3rem;'>🚁</div>",
            unsafe_allow_html=True,
        )


def inspections_frame(inspections):
    return pd.DataFrame(inspections or [], columns=["type", "interval"])


def inspections_from_frame(frame):
    """Editor rows back to [{type, interval}], blank rows dropped."""
    rows = []
    for record in frame.fillna("").to_dict("records"):
        if str(record.get("type", "")).strip():
            rows.append({"type": str(record["type"]).strip(), "interval": str(record.get("interval", "")).strip()})
    return rows


# --- Streamlit Page Class ---

class Page:
    def __init__(self, service):
        self.service = service

        self.meta = {
            "title_override": "Fleet Gallery",
            "last_updated": datetime.now().strftime("%Y-%m-%d %H:%M"),
            "data_source": f"{service.source_name} · aircraft",
            "coming_soon": False,
        }

        # (action, aircraft id): ("add", None), ("edit", id), ("details", id), ("delete", id)
        if "fleet_action" not in st.session_state:
            st.session_state.fleet_action = (None, None)

        self.refresh_data()

    def refresh_data(self):
        self.aircraft = self.service.fetch_aircraft()
        self.reference = self.service.fetch_reference_data()
        self.by_id = {a.id: a for a in self.aircraft}

    def _options(self, category):
        return [option.value for option in self.reference.get(category, [])]

    # --- GALLERY ---
    def _render_gallery(self):
        c1, c2 = st.columns([4, 1])
        c1.markdown(f"**{len(self.aircraft)}** aircraft in the fleet.")
        if c2.button("➕ Add aircraft", use_container_width=True):
            st.session_state.fleet_action = ("add", None)
            st.rerun()

        for start in range(0, len(self.aircraft), CARDS_PER_ROW):
            cols = st.columns(CARDS_PER_ROW)
            for col, aircraft in zip(cols, self.aircraft[start:start + CARDS_PER_ROW]):
                with col, st.container(border=True):
                    show_aircraft_image(aircraft)
                    st.markdown(f"#### {aircraft.type}")
                    st.caption(f"{aircraft.registration} · {aircraft.configuration}")
                    if aircraft.base_location:
                        st.caption("📍 " + ", ".join(aircraft.base_location))
                    b1, b2, b3 = st.columns(3)
                    if b1.button("Details", key=f"fleet_details_{aircraft.id}"):
                        st.session_state.fleet_action = ("details", aircraft.id)
                        st.rerun()
                    if b2.button("Edit", key=f"fleet_edit_{aircraft.id}"):
                        st.session_state.fleet_action = ("edit", aircraft.id)
                        st.rerun()
                    if b3.button("Delete", key=f"fleet_delete_{aircraft.id}"):
                        st.session_state.fleet_action = ("delete", aircraft.id)
                        st.rerun()

    # --- DETAILS ---
    def _render_details(self, aircraft):
        st.subheader(f"{aircraft.type} · {aircraft.registration}")
        c1, c2 = st.columns([1, 2])
        with c1:
            show_aircraft_image(aircraft)
            if aircraft.status:
                st.markdown(f"**Status:** {aircraft.status}")
        with c2:
            specs = aircraft.specifications
            st.markdown("**Specifications**")
            st.table(pd.DataFrame(
                [
                    ("Configuration", aircraft.configuration),
                    ("Passenger capacity", specs.passenger_capacity),
                    ("Max takeoff weight", specs.max_takeoff_weight),
                    ("Max cruise speed", specs.max_cruise_speed),
                    ("Range", specs.range),
                    ("Service ceiling", specs.service_ceiling),
                ],
                columns=["Item", "Value"],
            ).set_index("Item"))

        c1, c2, c3 = st.columns(3)
        for col, title, values in (
            (c1, "Capabilities", aircraft.capabilities),
            (c2, "Special equipment", aircraft.special_equipment),
            (c3, "Base locations", aircraft.base_location),
        ):
            col.markdown(f"**{title}**")
            for value in values:
                col.markdown(f"- {value}")

        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Inspections**")
            if aircraft.maintenance.inspections:
                st.dataframe(
                    inspections_frame([{"type": i.type, "interval": i.interval}
                                       for i in aircraft.maintenance.inspections]),
                    hide_index=True, use_container_width=True,
                )
            else:
                st.caption("No inspections recorded.")
        with c2:
            st.markdown("**Common issues**")
            for issue in aircraft.maintenance.common_issues:
                st.markdown(f"- {issue}")

        if st.button("⬅️ Back to gallery"):
            st.session_state.fleet_action = (None, None)
            st.rerun()

    # --- ADD / EDIT ---
    def _render_form(self, aircraft):
        editing = aircraft is not None
        st.subheader("Edit aircraft" if editing else "Add aircraft")
        values = form_from_aircraft(aircraft) if editing else dict(EMPTY_FORM)

        form_col, side_col = st.columns([3, 1])
        with side_col:
            self._render_reference_panel()

        with form_col, st.form(f"aircraft_form_{aircraft.id if editing else 'new'}"):
            c1, c2 = st.columns(2)
            values["type"] = c1.text_input("Aircraft type *", value=values["type"])
            values["registration"] = c2.text_input("Registration *", value=values["registration"])
            values["configuration"] = st.text_input("Configuration", value=values["configuration"])

            st.markdown("**Specifications**")
            c1, c2, c3 = st.columns(3)
            values["passenger_capacity"] = c1.text_input("Passenger capacity", value=values["passenger_capacity"])
            values["max_takeoff_weight"] = c2.text_input("Max takeoff weight", value=values["max_takeoff_weight"])
            values["max_cruise_speed"] = c3.text_input("Max cruise speed", value=values["max_cruise_speed"])
            values["range"] = c1.text_input("Range", value=values["range"])
            values["service_ceiling"] = c2.text_input("Service ceiling", value=values["service_ceiling"])

            for key, category, label in (
                ("capabilities", "capability", "Capabilities *"),
                ("base_locations", "location", "Base locations *"),
                ("special_equipment", "equipment", "Special equipment"),
            ):
                options = self._options(category)
                # Keep values that are no longer in the reference table selectable
                options += [v for v in values[key] if v not in options]
                values[key] = st.multiselect(label, options, default=values[key])

            st.markdown("**Inspections**")
            edited = st.data_editor(
                inspections_frame(values["inspections"]),
                num_rows="dynamic",
                use_container_width=True,
                column_config={
                    "type": st.column_config.TextColumn("Inspection"),
                    "interval": st.column_config.TextColumn("Interval"),
                },
                key=f"fleet_inspections_{aircraft.id if editing else 'new'}",
            )
            values["common_issues"] = st.text_area(
                "Common issues (one per line)", value=values["common_issues"],
            )
            image = st.file_uploader(
                "Replace image" if editing else "Image", type=ALLOWED_IMAGE_TYPES,
            )

            b1, b2 = st.columns(2)
            submitted = b1.form_submit_button("Save aircraft", type="primary")
            cancelled = b2.form_submit_button("Cancel")

        if cancelled:
            st.session_state.fleet_action = (None, None)
            st.rerun()

        if submitted:
            values["inspections"] = inspections_from_frame(edited)
            errors = validate_aircraft_form(values)
            if errors:
                for message in errors.values():
                    form_col.error(message)
                return
            if editing:
                result = self.service.edit_aircraft(aircraft, values, image=image)
            else:
                result = self.service.add_aircraft(values, image=image)
            if result.ok:
                st.session_state.fleet_action = (None, None)
                st.rerun()

    def _render_reference_panel(self):
        with st.expander("➕ Add dropdown option"):
            category = st.selectbox(
                "List", list(REFERENCE_LABELS.keys()), format_func=REFERENCE_LABELS.get,
                key="fleet_ref_category",
            )
            value = st.text_input("New value", key="fleet_ref_value")
            if st.button("Add option", key="fleet_ref_add"):
                if self.service.add_reference_item(category, value):
                    st.rerun()

    # --- DELETE ---
    def _render_delete(self, aircraft):
        st.warning(f"Delete **{aircraft.type}** ({aircraft.registration}) and its image?")
        c1, c2 = st.columns(2)
        if c1.button("Confirm delete", type="primary"):
            result = self.service.delete_aircraft(aircraft)
            if result.ok:
                st.session_state.fleet_action = (None, None)
                st.rerun()
        if c2.button("Cancel"):
            st.session_state.fleet_action = (None, None)
            st.rerun()

    # --- This is the "recipe" function that gets returned ---

    def render_body(self) -> None:
        action, aircraft_id = st.session_state.fleet_action
        aircraft = self.by_id.get(aircraft_id)

        if action == "add":
            self._render_form(None)
        elif action == "edit" and aircraft:
            self._render_form(aircraft)
        elif action == "details" and aircraft:
            self._render_details(aircraft)
        elif action == "delete" and aircraft:
            self._render_delete(aircraft)
        else:
            self._render_gallery()


# -----------------------------------------------------------------------------
# META HEADER DETAILS BACK TO MAIN
# -----------------------------------------------------------------------------

def render_page(service) -> (callable, dict):
    page = Page(service=service)
    return page.render_body, page.meta
