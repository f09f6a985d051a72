"""Reusable Streamlit widget patterns."""

from __future__ import annotations

import streamlit as st

from core.recommendations.association_rules import TIERS

# label -> days; 0 means all time
TIME_RANGES: dict[str, int] = {
    "Last 7 days": 7,
    "Last 30 days": 30,
    "Last 90 days": 90,
    "Last year": 365,
    "Last 2 years": 730,
    "All time": 0,
}


def time_range_selector(key: str, default: str = "Last 30 days") -> int:
    """Time range selection; returns days (0 = all time)."""
    labels = list(TIME_RANGES)
    label = st.selectbox(
        "Time Range",
        labels,
        index=labels.index(default),
        key=key,
        help="The resolution (daily, weekly, monthly...) follows the length of the range.",
    )
    return TIME_RANGES[label]


def confidence_selector(key: str, default: str = "medium", tiers=TIERS, label: str = "Minimum Confidence") -> str:
    """Confidence tier for bundle or price recommendations."""
    return st.radio(
        label,
        list(tiers),
        index=list(tiers).index(default),
        horizontal=True,
        key=key,
        help="Higher tiers keep only recommendations backed by more sales evidence.",
    )


def user_filter(user_ids: list[str]) -> str | None:
    """Optional store/owner filter."""
    if not user_ids:
        return None
    choice = st.selectbox("Store / Owner", ["All", *user_ids])
    return None if choice == "All" else choice


def seed_input() -> int | None:
    """Random seed for reproducible projections."""
    with st.expander("Advanced Settings", expanded=False):
        fixed = st.checkbox("Fix random seed", value=False, help="Makes projected values repeatable.")
        if fixed:
            return int(st.number_input("Seed", min_value=0, max_value=2**31 - 1, value=42, step=1))
    return None
