"""Page 3: Historical revenue trends and seasonality."""

import streamlit as st

from ui.layout import page_header, metric_row, show_analytics_error
from ui.session import require_stage, set_stage, log_action, DATA_LOADED, TRENDS_RUN
from ui.widgets import time_range_selector, user_filter
from ui.charts import plot_revenue_trend, plot_seasonal_indices
from core.errors import AnalyticsError
from core.export.frames import series_frame

page_header(
    "Revenue Trends",
    "Revenue per period with growth statistics, a trend label and seasonal patterns.",
)

if not require_stage(DATA_LOADED, "Please load sales data first."):
    st.stop()

engine = st.session_state["engine"]

col1, col2, col3 = st.columns(3)
with col1:
    days = time_range_selector("trend_range", default="Last year")
with col2:
    user_id = user_filter(st.session_state.get("user_ids", []))
with col3:
    include_forecast = st.checkbox("Include 12-period forecast", value=False)

if st.button("Analyze Revenue", type="primary"):
    try:
        with st.spinner("Analyzing revenue..."):
            analysis = engine.analyze_revenue(days, user_id=user_id, include_forecast=include_forecast)
    except AnalyticsError as e:
        show_analytics_error(e)
        st.stop()

    st.session_state["trend_analysis"] = analysis
    set_stage(TRENDS_RUN)
    log_action(f"Revenue analyzed ({days or 'all'} days, {analysis.resolution.label})")

analysis = st.session_state.get("trend_analysis")
if analysis is None:
    st.stop()

metric_row({
    "Total": analysis.total,
    "Average": analysis.average,
    "Overall Growth": f"{analysis.growth.overall:.1f}%",
    "Trend": analysis.trend.title(),
})

st.plotly_chart(plot_revenue_trend(analysis.points, analysis.forecast), use_container_width=True)

col1, col2 = st.columns(2)
col1.metric("Best Period", analysis.max_point.label, f"{analysis.max_point.value:,.2f}")
col2.metric("Weakest Period", analysis.min_point.label, f"{analysis.min_point.value:,.2f}")

# --- Seasonality ---
st.subheader("Seasonality")
s = analysis.seasonality
if s is None:
    st.info("Seasonality is analyzed for hourly, daily and monthly views with at least 7 periods.")
else:
    names = [s.unit_name(i) for i in range(len(s.indices))]
    st.plotly_chart(plot_seasonal_indices(names, s.indices, f"Seasonal Index by {s.unit.title()}"),
                    use_container_width=True)
    if s.detected:
        st.success(f"Pattern detected: {s.unit_name(s.strongest)} is strongest, {s.unit_name(s.weakest)} weakest.")
    else:
        st.info("No pronounced seasonal pattern.")

with st.expander("Data Table", expanded=False):
    st.dataframe(series_frame(analysis.points), use_container_width=True)
