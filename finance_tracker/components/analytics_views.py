"""Analytics tab views: yearly chart, budget vs spend, method breakdown.

Each view keeps its own :class:`RecordList` in the context and reloads
whenever the owner, its selected period or the user's saved data changes.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st

from .. import visualization as viz
from ..analytics import (
    EXPENDITURE,
    INCOME,
    breakdown_by_method,
    compare_budget_to_spend,
    comparison_totals,
    period_totals,
    series_by_month_and_category,
    yearly_totals,
)
from ..context import AppContext
from ..formatting import format_amount
from ..periods import current_period, month_date_range, month_number, year_options
from .common import ensure_loaded, record_list, render_error_banner
from .period import render_period_selector


def render_yearly_chart(ctx: AppContext) -> None:
    """Stacked monthly totals per category for one year and type."""
    owner_id = ctx.user_id
    st.subheader("Yearly overview")

    _, this_year = current_period()
    years = year_options()
    cols = st.columns(2)
    year = cols[0].selectbox("Year", years, index=years.index(this_year), key="yearly-year")
    txn_type = cols[1].radio("Type", [EXPENDITURE, INCOME], horizontal=True, key="yearly-type")

    records = record_list(ctx, 'analytics:yearly', 'transaction', 'transactions')
    start, _ = month_date_range(1, int(year))
    _, end = month_date_range(12, int(year))
    ensure_loaded(
        records, ctx.data_key(owner_id, year, txn_type),
        lambda: records.gateway.list_where(owner_id, gte={'date': start}, lt={'date': end}),
    )
    render_error_banner(records, 'yearly')

    yearly = series_by_month_and_category(records.records, year, txn_type)
    if not yearly.series:
        st.info(f"No {txn_type.lower()} recorded for {year}.")
        return

    totals = yearly_totals(yearly)
    metrics = st.columns(2)
    metrics[0].metric(f"Total {txn_type}", format_amount(totals['total']))
    metrics[1].metric("Monthly average", format_amount(totals['monthly_average']))
    st.plotly_chart(
        viz.create_yearly_category_chart(yearly, title=f"{txn_type} by category, {year}"),
        use_container_width=True,
    )


def render_budget_comparison(ctx: AppContext) -> None:
    """Budgeted vs spent per category for the selected month."""
    owner_id = ctx.user_id
    st.subheader("Budget vs spend")
    month, year = render_period_selector('comparison')
    key = ctx.data_key(owner_id, month, year)

    budgets = record_list(ctx, 'analytics:comparison-budgets', 'budget', 'budgets')
    transactions = record_list(ctx, 'analytics:comparison-transactions', 'transaction', 'transactions')
    ensure_loaded(budgets, key, lambda: budgets.gateway.list_by_period(owner_id, month, year))
    ensure_loaded(
        transactions, key,
        lambda: transactions.gateway.list_by_period(owner_id, month_number(month), year),
    )
    render_error_banner(budgets, 'comparison-budgets')
    render_error_banner(transactions, 'comparison-transactions')

    comparison = compare_budget_to_spend(budgets.records, transactions.records)
    if not comparison:
        st.info(f"No budgets or expenditure for {month} {year}.")
        return

    totals = comparison_totals(comparison)
    metrics = st.columns(3)
    metrics[0].metric("Total Budget", format_amount(totals['budget']))
    metrics[1].metric("Total Spent", format_amount(totals['spent']))
    metrics[2].metric("Remaining", format_amount(totals['difference']))

    st.plotly_chart(viz.create_budget_comparison_chart(comparison), use_container_width=True)

    def _status(row) -> str:
        if not row.has_budget:
            return "No budget"
        if row.is_over_budget:
            return "Over budget"
        if row.is_under_budget:
            return "Under budget"
        return "On budget"

    table = pd.DataFrame([
        {
            "Category": row.category,
            "Budget": format_amount(row.budget_amount),
            "Spent": format_amount(row.spent_amount),
            "Difference": format_amount(row.difference),
            "Status": _status(row),
        }
        for row in comparison
    ])
    st.dataframe(table, hide_index=True, use_container_width=True)


def render_method_breakdown(ctx: AppContext) -> None:
    """Income and expenditure per payment method for the selected month."""
    owner_id = ctx.user_id
    st.subheader("By payment method")
    month, year = render_period_selector('methods')

    records = record_list(ctx, 'analytics:methods', 'transaction', 'transactions')
    ensure_loaded(
        records, ctx.data_key(owner_id, month, year),
        lambda: records.gateway.list_by_period(owner_id, month_number(month), year),
    )
    render_error_banner(records, 'methods')

    breakdown = breakdown_by_method(records.records)
    if not breakdown:
        st.info(f"No transactions for {month} {year}.")
        return

    totals = period_totals(records.records)
    metrics = st.columns(2)
    metrics[0].metric("Total Income", format_amount(totals['income']))
    metrics[1].metric("Total Expenditure", format_amount(totals['expenditure']))

    st.plotly_chart(viz.create_method_breakdown_chart(breakdown), use_container_width=True)
    st.dataframe(
        pd.DataFrame([
            {"Method": row.method, "Income": format_amount(row.income), "Expenditure": format_amount(row.expenditure)}
            for row in breakdown
        ]),
        hide_index=True,
        use_container_width=True,
    )
