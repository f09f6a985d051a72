"""Page 1: Load sales transactions from a file or the sample generator."""

import streamlit as st
import pandas as pd
from io import BytesIO

from ui.layout import page_header, show_line_item_summary
from ui.session import set_stage, log_action, build_engine, DATA_LOADED
from ui.widgets import seed_input
from core.data.ingestion import load_file, frame_to_sale_rows
from core.data.column_mapping import auto_detect_sales_columns, SalesColumnMapping
from data.generate_sample import generate_sample_sales

page_header(
    "Sales Data",
    "Upload an Excel or CSV export of sale line items, or generate a sample dataset. "
    "Each row is one item of a sale; rows sharing a sale id form one transaction.",
)

# --- Template Download ---
with st.expander("Download Template"):
    template_df = pd.DataFrame({
        "sale_id": ["S1", "S1", "S2"],
        "date": pd.to_datetime(["2024-03-01 10:15", "2024-03-01 10:15", "2024-03-02 16:40"]),
        "user_id": ["store-north", "store-north", "store-south"],
        "product_id": ["p-dripper", "p-filter", "p-mug"],
        "product_name": ["Pour-Over Dripper", "Paper Filters", "Ceramic Mug"],
        "quantity": [1, 2, 1],
        "unit_price": [24.00, 4.25, 12.00],
    })
    st.dataframe(template_df, use_container_width=True)

    buf = BytesIO()
    template_df.to_excel(buf, index=False, engine="openpyxl")
    buf.seek(0)
    st.download_button(
        "Download Template (.xlsx)",
        data=buf,
        file_name="sales_template.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )

# --- Source ---
st.subheader("1. Choose a Source")
source = st.radio("Source", ["Upload file", "Generate sample"], horizontal=True)

if source == "Upload file":
    uploaded_file = st.file_uploader(
        "Choose an Excel (.xlsx) or CSV file",
        type=["xlsx", "xls", "csv"],
        help="Needs a date column plus either a sale amount or quantity and price columns.",
    )
    if uploaded_file is not None:
        try:
            result = load_file(uploaded_file, uploaded_file.name)
            st.session_state["raw_df"] = result.df
            log_action(f"Uploaded file: {uploaded_file.name} ({result.shape[0]} rows, {result.shape[1]} cols)")
        except Exception as e:
            st.error(f"Error loading file: {e}")
            st.stop()
else:
    n_days = st.slider("Days of history", 30, 1095, 730, step=5)
    if st.button("Generate", type="secondary"):
        st.session_state["raw_df"] = generate_sample_sales(n_days=n_days)
        log_action(f"Generated {n_days} days of sample sales")

raw_df = st.session_state.get("raw_df")
if raw_df is None:
    st.info("Please upload a file or generate sample data to get started.")
    st.stop()

auto_mapping = auto_detect_sales_columns(raw_df)
show_line_item_summary(raw_df, auto_mapping.date_col)

# --- Column Mapping ---
st.subheader("2. Column Mapping")
options = ["(none)", *raw_df.columns.tolist()]


def _column_select(label: str, detected: str | None, key: str) -> str | None:
    index = options.index(detected) if detected in options else 0
    choice = st.selectbox(label, options, index=index, key=key)
    return None if choice == "(none)" else choice


col1, col2 = st.columns(2)
with col1:
    date_col = _column_select("Date", auto_mapping.date_col, "map_date")
    sale_id_col = _column_select("Sale ID", auto_mapping.sale_id_col, "map_sale")
    amount_col = _column_select("Sale Total", auto_mapping.amount_col, "map_amount")
    user_col = _column_select("Store / Owner", auto_mapping.user_col, "map_user")
with col2:
    product_id_col = _column_select("Product ID", auto_mapping.product_id_col, "map_pid")
    product_name_col = _column_select("Product Name", auto_mapping.product_name_col, "map_pname")
    quantity_col = _column_select("Quantity", auto_mapping.quantity_col, "map_qty")
    price_col = _column_select("Unit Price", auto_mapping.price_col, "map_price")

mapping = SalesColumnMapping(
    sale_id_col=sale_id_col,
    date_col=date_col,
    amount_col=amount_col,
    user_col=user_col,
    product_id_col=product_id_col,
    product_name_col=product_name_col,
    quantity_col=quantity_col,
    price_col=price_col,
)
st.session_state["mapping"] = mapping

if not mapping.is_complete:
    st.warning("Map a date column and either a sale total or both quantity and unit price.")
    st.stop()

seed = seed_input()

# --- Load ---
st.subheader("3. Load Into Dashboard")
if st.button("Load Sales", type="primary"):
    try:
        rows = frame_to_sale_rows(raw_df, mapping)
    except Exception as e:
        st.error(f"Error converting rows: {e}")
        st.stop()

    build_engine(rows, seed)
    set_stage(DATA_LOADED)
    log_action(f"Loaded {len(rows)} sales")

    users = sorted({str(r["userId"]) for r in rows if r.get("userId") is not None})
    st.session_state["user_ids"] = users
    st.success(f"{len(rows):,} sales loaded. Open the analysis pages from the sidebar.")
