"""Page 5: Export and Reporting."""

import streamlit as st
from datetime import datetime

from ui.layout import page_header
from ui.session import require_stage, DATA_LOADED, log_action
from core.export.excel_report import create_analytics_workbook
from core.export.csv_export import export_frame_csv
from core.export.frames import (
    projection_frame,
    bundles_frame,
    day_of_week_frame,
    optimal_products_frame,
    price_recommendations_frame,
)
from core.export.summary_report import build_text_report

page_header(
    "Export & Report",
    "Download projections, recommendations and a summary report.",
)

if not require_stage(DATA_LOADED, "Please load sales data first."):
    st.stop()

projection = st.session_state.get("projection")
trend_analysis = st.session_state.get("trend_analysis")
recommendations = st.session_state.get("recommendations")
optimal = st.session_state.get("optimal_products", [])
pricing = st.session_state.get("price_analysis")

if projection is None and trend_analysis is None and recommendations is None:
    st.info("Run at least one analysis before exporting.")
    st.stop()

projection_df = projection_frame(projection) if projection is not None else None
bundles_df = bundles_frame(recommendations.product_bundles) if recommendations is not None else None
day_df = day_of_week_frame(recommendations.day_of_week_trends) if recommendations is not None else None
optimal_df = optimal_products_frame(optimal) if optimal else None
pricing_df = price_recommendations_frame(pricing.recommendations) if pricing is not None else None

repository = st.session_state.get("repository")
summary_text = build_text_report(
    {
        "Sales loaded": len(repository) if repository is not None else 0,
        "Generated": datetime.now().strftime("%Y-%m-%d %H:%M"),
    },
    projection=projection,
    trends=trend_analysis,
    recommendations=recommendations,
    pricing=pricing,
)

# --- Report ---
st.subheader("Summary Report")
st.text(summary_text)

stamp = datetime.now().strftime("%Y%m%d_%H%M")

# --- Downloads ---
st.subheader("Downloads")
col1, col2 = st.columns(2)

with col1:
    workbook = create_analytics_workbook(
        projection_df=projection_df,
        bundles_df=bundles_df,
        day_of_week_df=day_df,
        optimal_df=optimal_df,
        pricing_df=pricing_df,
        summary_text=summary_text,
    )
    if st.download_button(
        "Download Excel Workbook",
        data=workbook,
        file_name=f"sales_analytics_{stamp}.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        type="primary",
    ):
        log_action("Exported Excel workbook")

    st.download_button(
        "Download Report (.txt)",
        data=summary_text,
        file_name=f"sales_analytics_{stamp}.txt",
        mime="text/plain",
    )

with col2:
    for label, df, name in [
        ("Projection", projection_df, "revenue_projection"),
        ("Bundles", bundles_df, "product_bundles"),
        ("Day of Week", day_df, "day_of_week"),
        ("Optimal Products", optimal_df, "optimal_products"),
        ("Price Recommendations", pricing_df, "price_recommendations"),
    ]:
        if df is not None and len(df) > 0:
            st.download_button(
                f"Download {label} (.csv)",
                data=export_frame_csv(df),
                file_name=f"{name}_{stamp}.csv",
                mime="text/csv",
            )

# --- Activity ---
activity = st.session_state.get("activity", [])
if activity:
    with st.expander(f"Activity Log ({len(activity)})"):
        for entry in reversed(activity):
            st.text(f"{entry['timestamp']}  {entry['message']}")
