"""Page 4: Day-of-week promotions, product bundles, optimal products and pricing."""

import streamlit as st

from ui.layout import page_header, show_analytics_error
from ui.session import require_stage, set_stage, log_action, DATA_LOADED, RECOMMENDATIONS_RUN
from ui.widgets import time_range_selector, confidence_selector, user_filter
from ui.charts import plot_day_of_week_heatmap, plot_optimal_products, plot_price_projection
from core.errors import AnalyticsError
from core.export.frames import bundles_frame, optimal_products_frame, price_recommendations_frame
from core.recommendations.pricing import PRICE_TIERS

page_header(
    "Sales Recommendations",
    "Which weekday each product sells best on, which products to bundle at a discount, and which prices to change.",
)

if not require_stage(DATA_LOADED, "Please load sales data first."):
    st.stop()

engine = st.session_state["engine"]

col1, col2, col3, col4 = st.columns(4)
with col1:
    days = time_range_selector("reco_range", default="Last 90 days")
with col2:
    min_confidence = confidence_selector("reco_confidence")
with col3:
    price_confidence = confidence_selector(
        "price_confidence", default="all", tiers=PRICE_TIERS, label="Price Confidence"
    )
with col4:
    user_id = user_filter(st.session_state.get("user_ids", []))

if st.button("Build Recommendations", type="primary"):
    try:
        with st.spinner("Mining transactions..."):
            recommendations = engine.compute_sales_recommendations(days, user_id, min_confidence)
            optimal = engine.compute_optimal_products(days, min_confidence, user_id)
            pricing = engine.compute_price_analysis(days, user_id, price_confidence)
    except AnalyticsError as e:
        show_analytics_error(e)
        st.stop()

    st.session_state["recommendations"] = recommendations
    st.session_state["optimal_products"] = optimal
    st.session_state["price_analysis"] = pricing
    set_stage(RECOMMENDATIONS_RUN)
    log_action(
        f"Recommendations built: {len(recommendations.day_of_week_trends)} trends, "
        f"{len(recommendations.product_bundles)} bundles, {len(pricing.recommendations)} price changes"
    )

recommendations = st.session_state.get("recommendations")
if recommendations is None:
    st.stop()

tab_days, tab_bundles, tab_optimal, tab_pricing = st.tabs(["Day of Week", "Bundles", "Optimal Products", "Pricing"])

with tab_days:
    trends = recommendations.day_of_week_trends
    if not trends:
        st.info("No product has enough units sold for a weekday pattern.")
    else:
        for t in trends[:5]:
            st.write(f"**{t.product_name}** sells best on **{t.best_day}** ({t.peak_percent}% of its daily average).")
        st.plotly_chart(plot_day_of_week_heatmap(trends), use_container_width=True)

with tab_bundles:
    bundles = recommendations.product_bundles
    if not bundles:
        st.info("No bundles meet this confidence level. Try a lower level or a longer range.")
    else:
        st.dataframe(bundles_frame(bundles), use_container_width=True)

with tab_optimal:
    optimal = st.session_state.get("optimal_products", [])
    if not optimal:
        st.info("No optimal products for this selection.")
    else:
        st.plotly_chart(plot_optimal_products(optimal), use_container_width=True)
        st.dataframe(optimal_products_frame(optimal), use_container_width=True)

with tab_pricing:
    pricing = st.session_state.get("price_analysis")
    if pricing is None or not pricing.recommendations:
        st.info("No price change is expected to move revenue by 2% or more. Products need at least two price points.")
    else:
        current = sum(p.current_revenue for p in pricing.revenue_projections)
        optimized = sum(p.optimized_revenue for p in pricing.revenue_projections)
        c1, c2, c3 = st.columns(3)
        c1.metric("Price Changes", len(pricing.recommendations))
        c2.metric("6-Month Revenue (current)", f"{current:,.0f}")
        c3.metric("6-Month Revenue (recommended)", f"{optimized:,.0f}", f"{optimized - current:+,.0f}")
        st.plotly_chart(plot_price_projection(pricing.revenue_projections), use_container_width=True)
        st.dataframe(price_recommendations_frame(pricing.recommendations), use_container_width=True)
