"""Page 2: Actual revenue with a forward projection."""

import streamlit as st

from ui.layout import page_header, metric_row, show_analytics_error
from ui.session import require_stage, set_stage, log_action, DATA_LOADED, PROJECTION_RUN
from ui.widgets import time_range_selector, user_filter
from ui.charts import plot_revenue_projection
from core.errors import AnalyticsError
from core.export.frames import projection_frame

page_header(
    "Revenue Projection",
    "Historical revenue up to today and a projection of the same length ahead. "
    "Short ranges use daily or weekly periods; a year or more uses months.",
)

if not require_stage(DATA_LOADED, "Please load sales data first."):
    st.stop()

engine = st.session_state["engine"]

col1, col2 = st.columns(2)
with col1:
    days = time_range_selector("projection_range", default="Last 90 days")
with col2:
    user_id = user_filter(st.session_state.get("user_ids", []))

if st.button("Project Revenue", type="primary"):
    try:
        with st.spinner("Projecting revenue..."):
            projection = engine.compute_revenue_projection(days, user_id=user_id)
    except AnalyticsError as e:
        show_analytics_error(e)
        st.stop()

    st.session_state["projection"] = projection
    set_stage(PROJECTION_RUN)
    log_action(f"Revenue projected ({days or 'all'} days, {projection.resolution.label})")

projection = st.session_state.get("projection")
if projection is None:
    st.stop()

actual_total = sum(p.value for p in projection.actual)
projected_total = sum(p.value for p in projection.projected)
current = projection.actual[projection.today_index]

metric_row({
    "Actual Revenue": actual_total,
    "Projected Revenue": projected_total,
    "Current Period": current.label,
    "Resolution": projection.resolution.label.title(),
})

st.plotly_chart(plot_revenue_projection(projection), use_container_width=True)

with st.expander("Data Table", expanded=False):
    st.dataframe(projection_frame(projection), use_container_width=True)
