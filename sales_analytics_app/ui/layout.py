"""Page furniture shared by the dashboard pages."""

from __future__ import annotations

import streamlit as st
import pandas as pd

from .session import STAGES, STAGE_LABELS, is_stage_complete, reset_dashboard


def page_header(title: str, description: str = ""):
    st.title(title)
    if description:
        st.caption(description)
    st.divider()


def progress_sidebar():
    """Completed analyses, plus a reset button, in the sidebar."""
    with st.sidebar:
        st.subheader("Progress")
        done = [stage for stage in STAGES if is_stage_complete(stage)]
        st.progress(len(done) / len(STAGES))
        for stage in STAGES:
            mark = "x" if stage in done else " "
            st.text(f"[{mark}] {STAGE_LABELS[stage]}")

        st.divider()
        if st.button("Reset Dashboard", type="secondary"):
            reset_dashboard()
            st.rerun()


def show_line_item_summary(df: pd.DataFrame, date_col: str | None = None, title: str = "Loaded Line Items"):
    """Row count, time span and a preview of raw line items."""
    with st.expander(title, expanded=False):
        col1, col2, col3 = st.columns(3)
        col1.metric("Line Items", f"{len(df):,}")
        col2.metric("Columns", f"{len(df.columns):,}")
        if date_col and date_col in df.columns:
            dates = pd.to_datetime(df[date_col], errors="coerce").dropna()
            if not dates.empty:
                col3.metric("Days Covered", f"{(dates.max() - dates.min()).days + 1:,}")

        st.dataframe(df.head(), use_container_width=True)


def metric_row(metrics: dict[str, float | str], columns: int = 4):
    """Display metrics in a row of columns."""
    cols = st.columns(columns)
    for i, (label, value) in enumerate(metrics.items()):
        col = cols[i % columns]
        if isinstance(value, float):
            col.metric(label, f"{value:,.2f}")
        else:
            col.metric(label, str(value))


def show_analytics_error(exc: Exception):
    """Render an engine failure with a hint matching its kind."""
    from core.errors import ConnectivityFailure, InsufficientDataError

    if isinstance(exc, ConnectivityFailure):
        st.error(f"The sales data source is unreachable. {exc}")
    elif isinstance(exc, InsufficientDataError):
        st.warning(f"{exc} Try a longer time range or a different store.")
    else:
        st.error(str(exc))
