"""Plotly chart builders for the analytics dashboard."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd
import plotly.graph_objects as go

from core.data.models import (
    DayOfWeekTrend,
    OptimalProduct,
    PriceProjectionPoint,
    RevenueProjection,
    TimeSeriesPoint,
)
from core.periods.period_key import WEEKDAY_NAMES

# Consistent color palette
COLORS = [
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
]


def plot_revenue_projection(projection: RevenueProjection, title: str = "Revenue Projection") -> go.Figure:
    """Actual revenue, projected revenue and a marker for the current period."""
    fig = go.Figure()

    actual = projection.actual
    fig.add_trace(go.Scatter(
        x=[p.label for p in actual],
        y=[p.value for p in actual],
        name="Actual",
        line=dict(color="black", width=2),
    ))

    if projection.projected:
        # Start the dashed line at the last actual point so the two connect
        joined = [actual[-1], *projection.projected]
        fig.add_trace(go.Scatter(
            x=[p.label for p in joined],
            y=[p.value for p in joined],
            name="Projected",
            line=dict(color=COLORS[0], width=2, dash="dash"),
        ))

    if actual:
        today = actual[projection.today_index]
        fig.add_trace(go.Scatter(
            x=[today.label],
            y=[today.value],
            name="Current period",
            mode="markers",
            marker=dict(color=COLORS[3], size=12, symbol="diamond"),
        ))

    fig.update_layout(
        title=title,
        xaxis_title=projection.resolution.label.title(),
        yaxis_title="Revenue",
        hovermode="x unified",
        template="plotly_white",
        height=450,
    )
    return fig


def plot_revenue_trend(
    points: Sequence[TimeSeriesPoint],
    forecast: Sequence[TimeSeriesPoint] | None = None,
    title: str = "Revenue Over Time",
) -> go.Figure:
    """Bars for each period's revenue, with an optional forecast line."""
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=[p.label for p in points],
        y=[p.value for p in points],
        name="Revenue",
        marker_color=COLORS[0],
        customdata=[p.count or 0 for p in points],
        hovertemplate="%{x}<br>Revenue: %{y:,.2f}<br>Sales: %{customdata}<extra></extra>",
    ))
    if forecast:
        fig.add_trace(go.Scatter(
            x=[p.label for p in forecast],
            y=[p.value for p in forecast],
            name="Forecast",
            line=dict(color=COLORS[1], width=2, dash="dash"),
        ))
    fig.update_layout(title=title, template="plotly_white", height=450, yaxis_title="Revenue")
    return fig


def plot_seasonal_indices(names: list[str], indices: list[float], title: str = "Seasonal Index") -> go.Figure:
    colors = [COLORS[2] if v > 1.2 else COLORS[3] if v < 0.8 else COLORS[7] for v in indices]
    fig = go.Figure(go.Bar(x=names, y=indices, marker_color=colors))
    fig.add_hline(y=1.0, line_dash="dot", line_color="gray")
    fig.update_layout(title=title, template="plotly_white", height=350, yaxis_title="Index (1.0 = average)")
    return fig


def plot_day_of_week_heatmap(trends: Sequence[DayOfWeekTrend], title: str = "Sales by Day of Week") -> go.Figure:
    """Heatmap of percent-of-average per product and weekday."""
    z = [[d.percent_of_average for d in t.sales_by_day] for t in trends]
    fig = go.Figure(go.Heatmap(
        z=z,
        x=WEEKDAY_NAMES,
        y=[t.product_name for t in trends],
        colorscale="RdYlGn",
        zmid=100,
        colorbar=dict(title="% of avg"),
    ))
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=max(300, 40 * len(trends) + 120),
        yaxis=dict(autorange="reversed"),
    )
    return fig


def plot_optimal_products(products: Sequence[OptimalProduct], title: str = "Optimal Products") -> go.Figure:
    df = pd.DataFrame([{"name": p.name, "score": p.score} for p in products])
    fig = go.Figure(go.Bar(
        x=df["score"] if len(df) else [],
        y=df["name"] if len(df) else [],
        orientation="h",
        marker_color=COLORS[4],
    ))
    fig.update_layout(
        title=title,
        template="plotly_white",
        height=max(300, 35 * len(df) + 120),
        xaxis=dict(range=[0, 100], title="Score"),
        yaxis=dict(autorange="reversed"),
    )
    return fig


def plot_price_projection(
    points: Sequence[PriceProjectionPoint],
    title: str = "Revenue at Current vs Recommended Prices",
) -> go.Figure:
    months = [p.date for p in points]
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=months, y=[p.current_revenue for p in points],
        mode="lines+markers", name="Current prices",
        line=dict(color=COLORS[7], dash="dash"),
    ))
    fig.add_trace(go.Scatter(
        x=months, y=[p.optimized_revenue for p in points],
        mode="lines+markers", name="Recommended prices",
        line=dict(color=COLORS[2], width=2),
    ))
    fig.update_layout(
        title=title,
        xaxis_title="Month",
        yaxis_title="Revenue",
        template="plotly_white",
        hovermode="x unified",
        height=400,
    )
    return fig
