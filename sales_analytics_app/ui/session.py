"""Session state for the dashboard: loaded sales, engine and results."""

from __future__ import annotations

import datetime

import numpy as np
import streamlit as st

DATA_LOADED = "data_loaded"
PROJECTION_RUN = "projection_run"
TRENDS_RUN = "trends_run"
RECOMMENDATIONS_RUN = "recommendations_run"

STAGES = [DATA_LOADED, PROJECTION_RUN, TRENDS_RUN, RECOMMENDATIONS_RUN]

STAGE_LABELS = {
    DATA_LOADED: "Sales Loaded",
    PROJECTION_RUN: "Revenue Projected",
    TRENDS_RUN: "Trends Analyzed",
    RECOMMENDATIONS_RUN: "Recommendations Built",
}

# Results cleared whenever a new dataset is loaded
_RESULT_KEYS = ("projection", "trend_analysis", "recommendations", "optimal_products", "price_analysis")

_DEFAULTS = {
    "raw_df": None,
    "mapping": None,
    "repository": None,
    "engine": None,
    "user_ids": [],
    "seed": None,
    "projection": None,
    "trend_analysis": None,
    "recommendations": None,
    "optimal_products": [],
    "price_analysis": None,
    "activity": [],
}


def init_session_state():
    if "stages" not in st.session_state:
        st.session_state["stages"] = {s: False for s in STAGES}
    for key, default in _DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = list(default) if isinstance(default, list) else default


def set_stage(stage: str, value: bool = True):
    st.session_state.setdefault("stages", {s: False for s in STAGES})[stage] = value


def is_stage_complete(stage: str) -> bool:
    return st.session_state.get("stages", {}).get(stage, False)


def require_stage(stage: str, message: str | None = None) -> bool:
    """Warn and return False when a prerequisite stage has not run."""
    if not is_stage_complete(stage):
        st.warning(message or f"Please complete the '{STAGE_LABELS[stage]}' step first.")
        return False
    return True


def reset_dashboard():
    for key in list(st.session_state.keys()):
        del st.session_state[key]
    init_session_state()


def log_action(message: str):
    """Append an entry to the activity log shown on the export page."""
    st.session_state.setdefault("activity", []).append(
        {"timestamp": datetime.datetime.now().isoformat(timespec="seconds"), "message": message}
    )


def build_engine(rows: list[dict], seed: int | None = None):
    """Wrap loaded sale rows in an in-memory repository and a fresh engine.

    Earlier results belong to the previous dataset and are dropped.
    """
    from core.data.repository import InMemorySalesRepository
    from core.services.engine import AnalyticsEngine

    repository = InMemorySalesRepository(rows)
    engine = AnalyticsEngine(repository, rng=np.random.default_rng(seed))
    st.session_state["repository"] = repository
    st.session_state["engine"] = engine
    st.session_state["seed"] = seed
    for key in _RESULT_KEYS:
        st.session_state[key] = [] if key == "optimal_products" else None
    for stage in STAGES[1:]:
        set_stage(stage, False)
    return engine
