"""Plotly visualisation helpers for the Finance Tracker.

Each function accepts an object returned by :mod:`finance_tracker.analytics`
and produces an interactive Plotly figure that Streamlit renders via
``st.plotly_chart``. Empty inputs produce an empty figure titled
"No data to display" rather than raising.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .analytics import CategoryComparison, MethodBreakdown, YearlyTypeSeries

# Cycled per category so colours stay stable between reruns
CATEGORY_PALETTE = [
    '#4F46E5', '#7C3AED', '#DC2626', '#EA580C', '#D97706', '#CA8A04',
    '#65A30D', '#16A34A', '#059669', '#0891B2', '#0284C7', '#2563EB',
    '#8B5CF6', '#A855F7', '#EC4899', '#F43F5E', '#EF4444', '#F97316',
    '#F59E0B', '#EAB308', '#84CC16', '#22C55E', '#10B981', '#14B8A6',
]


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_yearly_category_chart(yearly: YearlyTypeSeries, title: str | None = None) -> go.Figure:
    """Stacked monthly bar chart with one trace per category.

    Parameters
    ----------
    yearly : YearlyTypeSeries
        Month labels plus a 12-value series per category.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Stacked bar chart of months vs amounts.
    """
    if not yearly.series:
        return _empty_figure()
    fig = go.Figure()
    for index, (category, values) in enumerate(yearly.series.items()):
        colour = CATEGORY_PALETTE[index % len(CATEGORY_PALETTE)]
        fig.add_trace(go.Bar(name=category, x=yearly.labels, y=values, marker_color=colour))
    fig.update_layout(
        barmode="stack",
        title=title or "Monthly totals by category",
        xaxis_title="Month",
        yaxis_title="Amount",
        legend_title="Category",
    )
    return fig


def create_budget_comparison_chart(
    comparison: Sequence[CategoryComparison],
    title: str | None = None,
) -> go.Figure:
    """Grouped bars of budget vs spent per category."""
    if not comparison:
        return _empty_figure()
    df = pd.DataFrame(
        [
            {"Category": row.category, "Budget": row.budget_amount, "Spent": row.spent_amount}
            for row in comparison
        ]
    ).melt(id_vars="Category", var_name="Series", value_name="Amount")
    fig = px.bar(
        df, x="Category", y="Amount", color="Series", barmode="group",
        color_discrete_map={"Budget": "#2563EB", "Spent": "#DC2626"},
    )
    fig.update_layout(title=title or "Budget vs spend", xaxis_title="Category", yaxis_title="Amount")
    return fig


def create_method_breakdown_chart(
    breakdown: Sequence[MethodBreakdown],
    title: str | None = None,
) -> go.Figure:
    """Grouped bars of income vs expenditure per payment method."""
    if not breakdown:
        return _empty_figure()
    df = pd.DataFrame(
        [
            {"Method": row.method, "Income": row.income, "Expenditure": row.expenditure}
            for row in breakdown
        ]
    ).melt(id_vars="Method", var_name="Type", value_name="Amount")
    fig = px.bar(
        df, x="Method", y="Amount", color="Type", barmode="group",
        color_discrete_map={"Income": "#16A34A", "Expenditure": "#DC2626"},
    )
    fig.update_layout(title=title or "Income and expenditure by method", xaxis_title="Method", yaxis_title="Amount")
    return fig
