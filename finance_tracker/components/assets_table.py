"""Assets list with a converted total and a detail panel."""

from __future__ import annotations

import streamlit as st

from ..analytics import total_assets_in_base_currency
from ..context import AppContext
from ..formatting import escape_dollar_for_markdown, format_amount, format_date
from ..list_state import ListView
from ..settings import get_config_value
from .common import ensure_loaded, render_delete_confirmation, render_error_banner
from .record_form import render_record_form

KEY = 'assets'


def _render_detail(view: ListView) -> None:
    asset = view.expanded_record()
    if asset is None:
        view.collapse()
        return
    with st.container(border=True):
        st.markdown(f"### {escape_dollar_for_markdown(asset.get('name', ''))}")
        st.metric("Value", escape_dollar_for_markdown(format_amount(asset.get('amount'), asset.get('currency'))))
        st.write(escape_dollar_for_markdown(asset.get('notes') or 'No notes.'))
        st.caption(f"Added {format_date(asset.get('created_at'))}")
        cols = st.columns(3)
        if cols[0].button("Edit", key=f"{KEY}-detail-edit"):
            view.open_edit(asset['id'])
            st.rerun()
        if cols[1].button("Delete", key=f"{KEY}-detail-delete"):
            view.request_delete(asset['id'])
            st.rerun()
        if cols[2].button("Close", key=f"{KEY}-detail-close"):
            view.collapse()
            st.rerun()


def render_assets(ctx: AppContext) -> None:
    owner_id = ctx.user_id
    view = ctx.list_view('asset', 'assets')
    ensure_loaded(view.records, owner_id, lambda: view.records.gateway.list(owner_id))

    title_col, add_col = st.columns([5, 1])
    title_col.subheader("Assets")
    if add_col.button("Add Asset", key=f"{KEY}-add", type="primary"):
        view.open_create()
        st.rerun()

    render_error_banner(view.records, KEY)
    render_record_form(view.form, lambda: view.submit(owner_id), key=f"{KEY}-form")

    base = get_config_value('options', 'base_currency', default='AED')
    total = total_assets_in_base_currency(view.records.records)
    st.metric(f"Total assets ({base})", format_amount(total, base))

    if view.expanded is not None:
        _render_detail(view)

    rows = view.visible()
    if not rows:
        st.info("No assets yet. Add an asset to track your portfolio.")
        return

    widths = [4, 3, 1]
    for record in rows:
        cols = st.columns(widths)
        cols[0].write(escape_dollar_for_markdown(str(record.get('name', ''))))
        cols[1].write(escape_dollar_for_markdown(format_amount(record.get('amount'), record.get('currency'))))
        if cols[2].button("View", key=f"{KEY}-view-{record['id']}"):
            view.expand(record['id'])
            st.rerun()

    render_delete_confirmation(
        view, owner_id, KEY,
        lambda r: f'the asset "{r.get("name", "")}"',
    )
