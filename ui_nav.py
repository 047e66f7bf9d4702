# ui_nav.py

import streamlit as st

from config import PORTAL_SUBTITLE, PORTAL_TITLE


def build_sidebar(section_icons, pages, source_name, connected):
    """
    Draw the sidebar UI and update session state
    (active_section, active_page_label).

    `source_name` is the data store's display name ("Hosted" / "Local") and
    `connected` the result of PortalService.check_connection().

    Returns a dict:
      {
        "active_section": ...,
        "active_page_label": ...,
        "refresh": True/False
      }
    """

    # --- 1. Initialize Session State (Defaults) ---
    if "active_section" not in st.session_state or st.session_state["active_section"] not in pages:
        st.session_state["active_section"] = list(pages.keys())[0]

    if (
            "active_page_label" not in st.session_state
            or st.session_state["active_page_label"] not in pages[st.session_state["active_section"]]
    ):
        st.session_state["active_page_label"] = list(
            pages[st.session_state["active_section"]].keys()
        )[0]

    active_section = st.session_state["active_section"]
    active_page_label = st.session_state["active_page_label"]

    with st.sidebar:
        st.markdown(f"### 🚁 {PORTAL_TITLE}")
        st.caption(PORTAL_SUBTITLE)

        # --- 2. Navigation ---
        for section_name, section_pages in pages.items():
            icon = section_icons.get(section_name, "📁")
            expanded_default = (section_name == active_section)
            with st.expander(f"{icon} {section_name}", expanded=expanded_default):
                for page_label in section_pages.keys():
                    is_current = (section_name == active_section and page_label == active_page_label)
                    button_label = f"• {page_label}"
                    if is_current:
                        button_label = f"✅ {page_label}"
                    clicked = st.button(
                        button_label,
                        key=f"nav::{section_name}::{page_label}"
                    )
                    if clicked:
                        st.session_state["active_section"] = section_name
                        st.session_state["active_page_label"] = page_label
                        st.rerun()

        # --- 3. Data source status ---
        st.markdown("---")
        st.write(f"**Data source:** `{source_name}`")
        if connected:
            st.success("Connected", icon="🟢")
        else:
            st.error("Not connected: pages show demo data", icon="🔴")

        refresh_clicked = st.button("🔄 Refresh data")

    return {
        "active_section": st.session_state["active_section"],
        "active_page_label": st.session_state["active_page_label"],
        "refresh": refresh_clicked,
    }
