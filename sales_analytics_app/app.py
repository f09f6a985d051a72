"""Sales Analytics Dashboard - Main Entry Point.

Run with: streamlit run app.py
"""

import logging

import streamlit as st

st.set_page_config(
    page_title="Sales Analytics Dashboard",
    page_icon="bar_chart",
    layout="wide",
    initial_sidebar_state="expanded",
)

from ui.session import init_session_state
from ui.layout import progress_sidebar

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Initialize session state
init_session_state()

# Define pages
pages = {
    "Data": [
        st.Page("pages/1_data_source.py", title="Sales Data", icon=":material/upload_file:"),
    ],
    "Revenue": [
        st.Page("pages/2_revenue_projection.py", title="Revenue Projection", icon=":material/trending_up:"),
        st.Page("pages/3_revenue_trends.py", title="Revenue Trends", icon=":material/insights:"),
    ],
    "Products": [
        st.Page("pages/4_sales_recommendations.py", title="Sales Recommendations", icon=":material/lightbulb:"),
    ],
    "Results": [
        st.Page("pages/5_export.py", title="Export & Report", icon=":material/download:"),
    ],
}

# Navigation
pg = st.navigation(pages)

# Sidebar: progress
progress_sidebar()

# Sidebar: app info
with st.sidebar:
    st.divider()
    st.caption("Sales Analytics Dashboard v1.0")
    st.caption("Load sale line items to project revenue and find bundles.")

# Run the selected page
pg.run()
