"""
apps/safety/risk_matrix.py

The Safety page: the operator's hazard register drawn as a 5x5 risk
matrix (likelihood x severity).

- "Inherent / Residual" toggle: plots each hazard by its rating before or
  after controls
- category filter: "All Risks" plus one option per category in the register
- heatmap cells are coloured by risk band and list the hazards in them
- pick a hazard to see consequences, controls and both ratings side by side
- the register table underneath can be downloaded as CSV

All classification happens in common/risk.py; this page only draws.
"""

from datetime import datetime

import plotly.express as px
import streamlit as st

from common.risk import (
    BAND_COLORS,
    BAND_RANGES,
    LIKELIHOOD_LEVELS,
    SEVERITY_LEVELS,
    build_matrix,
    categories,
    classify,
    filter_by_category,
    register_frame,
)

ALL_RISKS = "All Risks"
BAND_ORDER = ["Low", "Medium", "High", "Extreme"]


# --- Helper Functions (specific to this page) ---

def matrix_figure(grid, title=None):
    """
    Heatmap of a build_matrix() grid. Colour is the band, the cell text is
    the score plus the ids of the hazards sitting in it.
    """
    z = [[BAND_ORDER.index(cell.rating.band) for cell in row] for row in grid]
    text = [
        [
            f"<b>{cell.rating.score}</b><br>" + "<br>".join(h.id for h in cell.hazards)
            for cell in row
        ]
        for row in grid
    ]
    hover = [
        [
            f"{cell.rating.label}<br>" + ("<br>".join(h.hazard for h in cell.hazards) or "No hazards")
            for cell in row
        ]
        for row in grid
    ]
    y_labels = [f"{row[0].likelihood} · {LIKELIHOOD_LEVELS[row[0].likelihood - 1]}" for row in grid]
    x_labels = [f"{cell.severity} · {SEVERITY_LEVELS[cell.severity - 1]}" for cell in grid[0]]

    fig = px.imshow(
        z,
        x=x_labels,
        y=y_labels,
        zmin=0,
        zmax=len(BAND_ORDER) - 1,
        color_continuous_scale=[BAND_COLORS[band] for band in BAND_ORDER],
        aspect="auto",
        title=title,
        labels={"x": "Severity", "y": "Likelihood"},
    )
    fig.update_traces(text=text, texttemplate="%{text}", customdata=hover,
                      hovertemplate="%{customdata}<extra></extra>")
    fig.update_layout(coloraxis_showscale=False, height=520, margin=dict(l=10, r=10, t=40, b=10))
    fig.update_xaxes(side="bottom")
    return fig


def render_band_badge(rating):
    color = BAND_COLORS[rating.band]
    st.markdown(
        f"<span style='background:{color};color:white;padding:0.2rem 0.6rem;"
        f"border-radius:6px;font-weight:600;'>{rating.label}</span>",
        unsafe_allow_html=True,
    )


# --- Streamlit Page Class ---

class Page:
    def __init__(self, service):
        self.service = service

        self.meta = {
            "title_override": "Risk Matrix",
            "last_updated": datetime.now().strftime("%Y-%m-%d %H:%M"),
            "data_source": f"{service.source_name} · risk_assessments",
            "coming_soon": False,
        }

        if "risk_use_residual" not in st.session_state:
            st.session_state.risk_use_residual = False
        if "risk_category" not in st.session_state:
            st.session_state.risk_category = ALL_RISKS

        self.refresh_data()

    def refresh_data(self):
        """Loads the register. The service handles fallbacks and bad rows."""
        self.records = self.service.fetch_risk_assessments()

    # --- TAB 1: MATRIX ---
    def _render_matrix_tab(self):
        c1, c2 = st.columns([1, 2])
        view = c1.radio(
            "Assessment",
            ["Inherent", "Residual"],
            index=1 if st.session_state.risk_use_residual else 0,
            horizontal=True,
            help="Inherent = before controls, Residual = after controls.",
        )
        st.session_state.risk_use_residual = (view == "Residual")

        options = [ALL_RISKS] + categories(self.records)
        if st.session_state.risk_category not in options:
            st.session_state.risk_category = ALL_RISKS
        chosen = c2.selectbox("Category", options, index=options.index(st.session_state.risk_category))
        st.session_state.risk_category = chosen

        use_residual = st.session_state.risk_use_residual
        visible = filter_by_category(self.records, None if chosen == ALL_RISKS else chosen)
        grid = build_matrix(visible, use_residual)

        m1, m2, m3 = st.columns(3)
        m1.metric("Hazards shown", len(visible))
        m2.metric("High or Extreme", sum(
            len(cell.hazards) for row in grid for cell in row if cell.rating.band in ("High", "Extreme")
        ))
        m3.metric("Categories", len(categories(self.records)))

        st.plotly_chart(
            matrix_figure(grid, title=f"{view} risk · {chosen}"),
            use_container_width=True,
        )

        legend = st.columns(len(BAND_ORDER))
        for col, band in zip(legend, BAND_ORDER):
            col.markdown(
                f"<span style='color:{BAND_COLORS[band]};font-size:1.2rem;'>■</span> "
                f"**{band}** ({BAND_RANGES[band]})",
                unsafe_allow_html=True,
            )

        st.markdown("---")
        self._render_hazard_detail(visible)

    def _render_hazard_detail(self, visible):
        st.subheader("🔍 Hazard Details")
        if not visible:
            st.info("No hazards in this category.")
            return

        by_id = {r.id: r for r in visible}
        selected_id = st.selectbox(
            "Select a hazard",
            list(by_id.keys()),
            format_func=lambda rid: f"{rid} · {by_id[rid].hazard}",
        )
        record = by_id[selected_id]

        st.markdown(f"#### {record.hazard}")
        st.caption(record.category)
        st.write(record.description)

        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Inherent risk**")
            render_band_badge(classify(record.inherent_likelihood, record.inherent_severity))
            st.caption(
                f"Likelihood {record.inherent_likelihood} ({LIKELIHOOD_LEVELS[record.inherent_likelihood - 1]}) · "
                f"Severity {record.inherent_severity} ({SEVERITY_LEVELS[record.inherent_severity - 1]})"
            )
        with c2:
            st.markdown("**Residual risk**")
            render_band_badge(classify(record.residual_likelihood, record.residual_severity))
            st.caption(
                f"Likelihood {record.residual_likelihood} ({LIKELIHOOD_LEVELS[record.residual_likelihood - 1]}) · "
                f"Severity {record.residual_severity} ({SEVERITY_LEVELS[record.residual_severity - 1]})"
            )

        c1, c2 = st.columns(2)
        with c1:
            st.markdown("**Potential consequences**")
            for consequence in record.consequences:
                st.markdown(f"- {consequence}")
        with c2:
            st.markdown("**Controls**")
            if not record.controls:
                st.caption("No controls recorded.")
            for control in record.controls:
                st.markdown(f"- {control.description}")

        st.markdown(f"**Responsible person:** {record.responsible_person or 'Unassigned'}")
        st.markdown(f"**Monitoring method:** {record.monitoring_method or 'Not defined'}")

    # --- TAB 2: REGISTER ---
    def _render_register_tab(self):
        use_residual = st.session_state.risk_use_residual
        label = "residual" if use_residual else "inherent"
        st.markdown(f"Full hazard register, rated on **{label}** risk.")

        frame = register_frame(self.records, use_residual)
        st.dataframe(frame, use_container_width=True, hide_index=True)
        st.download_button(
            "⬇️ Download register (CSV)",
            data=frame.to_csv(index=False).encode("utf-8"),
            file_name=f"risk_register_{label}.csv",
            mime="text/csv",
        )

    # --- This is the "recipe" function that gets returned ---

    def render_body(self) -> None:
        tab_matrix, tab_register = st.tabs(["🟥 Risk Matrix", "📋 Hazard Register"])

        with tab_matrix:
            self._render_matrix_tab()

        with tab_register:
            self._render_register_tab()


# -----------------------------------------------------------------------------
# META HEADER DETAILS BACK TO MAIN
# -----------------------------------------------------------------------------

def render_page(service) -> (callable, dict):
    page = Page(service=service)
    return page.render_body, page.meta
