"""Budgets for one selected month and year."""

from __future__ import annotations

import streamlit as st

from ..analytics import budget_total
from ..context import AppContext
from ..formatting import escape_dollar_for_markdown, format_amount
from .common import ensure_loaded, render_delete_confirmation, render_error_banner, render_row_menu
from .period import render_period_selector
from .record_form import render_record_form

KEY = 'budgets'


def render_budgets(ctx: AppContext) -> None:
    owner_id = ctx.user_id
    view = ctx.list_view('budget', 'budgets')

    title_col, add_col = st.columns([5, 1])
    title_col.subheader("Budgets")
    month, year = render_period_selector(KEY)
    period = f"{month} {year}"

    ensure_loaded(
        view.records, (owner_id, month, year),
        lambda: view.records.gateway.list_by_period(owner_id, month, year),
    )

    if add_col.button("Add Budget", key=f"{KEY}-add", type="primary"):
        view.open_create()
        st.rerun()

    render_error_banner(view.records, KEY)
    render_record_form(
        view.form,
        lambda: view.submit(owner_id, extra={'month': month, 'year': year}),
        key=f"{KEY}-form",
        context={'period': period},
    )

    st.metric(f"Total budget for {period}", format_amount(budget_total(view.records.records)))

    rows = view.visible()
    if not rows:
        st.info(f"No budgets set for {period}.")
        return

    widths = [4, 3, 1]
    header = st.columns(widths)
    for col, (label, key) in zip(header, [('Category', 'category'), ('Amount', 'amount')]):
        if col.button(label, key=f"{KEY}-sort-{key}"):
            view.sort_by(key)
            st.rerun()

    for record in rows:
        cols = st.columns(widths)
        cols[0].write(escape_dollar_for_markdown(str(record.get('category', ''))))
        cols[1].write(format_amount(record.get('amount')))
        with cols[2]:
            render_row_menu(view, record['id'], KEY)

    render_delete_confirmation(
        view, owner_id, KEY,
        lambda r: f'the budget for "{r.get("category", "")}"',
    )
