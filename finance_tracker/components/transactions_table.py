"""Transactions list: search, sort, add, edit and delete."""

from __future__ import annotations

import streamlit as st

from ..analytics import INCOME, period_totals
from ..context import AppContext
from ..formatting import escape_dollar_for_markdown, format_amount, format_date
from ..list_state import ListView
from .common import ensure_loaded, render_delete_confirmation, render_error_banner, render_row_menu
from .record_form import render_record_form

KEY = 'transactions'

SEARCH_COLUMNS = {
    'Name': 'name',
    'Type': 'type',
    'Category': 'category',
    'Method': 'method',
}

# (header, sort key); the last column holds the row menu
COLUMNS = [
    ('Date', 'date'),
    ('Name', 'name'),
    ('Type', 'type'),
    ('Category', 'category'),
    ('Method', 'method'),
    ('Amount', 'amount'),
]
WIDTHS = [2, 3, 2, 2, 2, 2, 1]


def _sort_label(view: ListView, header: str, key: str) -> str:
    if view.sort.key != key:
        return header
    return f"{header} {'↓' if view.sort.descending else '↑'}"


def _render_search(view: ListView) -> None:
    cols = st.columns([1, 3])
    labels = list(SEARCH_COLUMNS)
    current = next((label for label, col in SEARCH_COLUMNS.items() if col == view.search.column), labels[0])
    column_label = cols[0].selectbox("Search by", labels, index=labels.index(current), key=f"{KEY}-search-column")
    term = cols[1].text_input(
        "Search", value=view.search.term, placeholder=f"Search by {column_label.lower()}...",
        key=f"{KEY}-search-term",
    )
    view.set_search(SEARCH_COLUMNS[column_label], term)


def _render_header(view: ListView) -> None:
    cols = st.columns(WIDTHS)
    for col, (header, key) in zip(cols, COLUMNS):
        if col.button(_sort_label(view, header, key), key=f"{KEY}-sort-{key}"):
            view.sort_by(key)
            st.rerun()


def render_transactions(ctx: AppContext) -> None:
    owner_id = ctx.user_id
    view = ctx.list_view('transaction', 'transactions')
    ensure_loaded(view.records, owner_id, lambda: view.records.gateway.list(owner_id))

    title_col, add_col = st.columns([5, 1])
    title_col.subheader("Transactions")
    if add_col.button("Add Transaction", key=f"{KEY}-add", type="primary"):
        view.open_create()
        st.rerun()

    render_error_banner(view.records, KEY)
    render_record_form(view.form, lambda: view.submit(owner_id), key=f"{KEY}-form")

    totals = period_totals(view.records.records)
    metrics = st.columns(3)
    metrics[0].metric("Income", format_amount(totals['income']))
    metrics[1].metric("Expenditure", format_amount(totals['expenditure']))
    metrics[2].metric("Net", format_amount(totals['net']))

    _render_search(view)
    rows = view.visible()
    if not view.records.records:
        st.info("No transactions yet. Add your first transaction to get started.")
        return
    if not rows:
        st.info("No transactions match your search.")
        return

    _render_header(view)
    for record in rows:
        cols = st.columns(WIDTHS)
        cols[0].write(format_date(record.get('date')))
        cols[1].write(escape_dollar_for_markdown(str(record.get('name', ''))))
        colour = 'green' if record.get('type') == INCOME else 'red'
        cols[2].markdown(f":{colour}[{record.get('type', '')}]")
        cols[3].write(escape_dollar_for_markdown(str(record.get('category', ''))))
        cols[4].write(escape_dollar_for_markdown(str(record.get('method', ''))))
        cols[5].write(format_amount(record.get('amount')))
        with cols[6]:
            render_row_menu(view, record['id'], KEY)

    render_delete_confirmation(
        view, owner_id, KEY,
        lambda r: f'the transaction "{r.get("name", "")}"',
    )
