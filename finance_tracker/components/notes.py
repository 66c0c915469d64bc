"""Note cards with an expanded reader."""

from __future__ import annotations

import streamlit as st

from ..context import AppContext
from ..formatting import escape_dollar_for_markdown, format_date, truncate_text
from ..list_state import ListView
from .common import ensure_loaded, render_delete_confirmation, render_error_banner
from .record_form import render_record_form

KEY = 'notes'
CARDS_PER_ROW = 3


def _render_reader(view: ListView) -> None:
    note = view.expanded_record()
    if note is None:
        view.collapse()
        return
    with st.container(border=True):
        st.markdown(f"### {escape_dollar_for_markdown(note.get('heading', ''))}")
        st.caption(f"Last updated {format_date(note.get('updated_at'))}")
        st.markdown(escape_dollar_for_markdown(note.get('content', '')))
        cols = st.columns(3)
        if cols[0].button("Edit", key=f"{KEY}-reader-edit"):
            view.open_edit(note['id'])
            st.rerun()
        if cols[1].button("Delete", key=f"{KEY}-reader-delete"):
            view.request_delete(note['id'])
            st.rerun()
        if cols[2].button("Close", key=f"{KEY}-reader-close"):
            view.collapse()
            st.rerun()


def render_notes(ctx: AppContext) -> None:
    owner_id = ctx.user_id
    view = ctx.list_view('note', 'notes')
    ensure_loaded(view.records, owner_id, lambda: view.records.gateway.list(owner_id))

    title_col, add_col = st.columns([5, 1])
    title_col.subheader("Notes")
    if add_col.button("Add Note", key=f"{KEY}-add", type="primary"):
        view.open_create()
        st.rerun()

    render_error_banner(view.records, KEY)
    render_record_form(view.form, lambda: view.submit(owner_id), key=f"{KEY}-form")

    if view.expanded is not None:
        _render_reader(view)

    notes = view.records.records
    if not notes:
        st.info("No notes yet. Add a note to keep track of important information.")
        return

    for start in range(0, len(notes), CARDS_PER_ROW):
        cols = st.columns(CARDS_PER_ROW)
        for col, note in zip(cols, notes[start:start + CARDS_PER_ROW]):
            with col.container(border=True):
                st.markdown(f"**{escape_dollar_for_markdown(truncate_text(note.get('heading'), 40))}**")
                st.write(escape_dollar_for_markdown(truncate_text(note.get('content'), 120)))
                st.caption(format_date(note.get('created_at')))
                if st.button("Open", key=f"{KEY}-open-{note['id']}"):
                    view.expand(note['id'])
                    st.rerun()

    render_delete_confirmation(
        view, owner_id, KEY,
        lambda r: f'the note "{r.get("heading", "")}"',
    )
