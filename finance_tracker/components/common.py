"""Small Streamlit pieces shared by the list views."""

from __future__ import annotations

from typing import Any, Callable, Hashable, Optional

import streamlit as st

from ..context import AppContext
from ..list_state import ListView, RecordList
from ..operations import Result, gateway_for


def ensure_loaded(records: RecordList, key: Hashable, fetch: Callable[[], Result]) -> None:
    """Load ``records`` on first render and whenever ``key`` changes."""
    if records.needs_load(key):
        with st.spinner(f"Loading {records.label}..."):
            records.load(key, fetch)


def record_list(ctx: AppContext, key: str, record_type: str, label: str) -> RecordList:
    """A bare :class:`RecordList` kept in the context, for read-only views."""
    return ctx.state(key, lambda: RecordList(gateway_for(record_type, ctx.store), label))


def render_error_banner(records: RecordList, key: str) -> None:
    if not records.error:
        return
    cols = st.columns([6, 1])
    cols[0].error(records.error)
    if cols[1].button("Dismiss", key=f"{key}-dismiss"):
        records.dismiss_error()
        st.rerun()


def render_row_menu(view: ListView, record_id: Any, key: str) -> None:
    """Toggle button plus Edit/Delete actions for one row."""
    if st.button("⋮", key=f"{key}-menu-{record_id}", help="Actions"):
        view.toggle_menu(record_id)
        st.rerun()
    if view.menu_open_for(record_id):
        if st.button("Edit", key=f"{key}-edit-{record_id}", use_container_width=True):
            view.open_edit(record_id)
            st.rerun()
        if st.button("Delete", key=f"{key}-delete-{record_id}", use_container_width=True):
            view.request_delete(record_id)
            st.rerun()


def render_delete_confirmation(
    view: ListView,
    owner_id: Optional[str],
    key: str,
    describe: Callable[[dict], str],
) -> None:
    """Confirmation panel for the record waiting to be deleted."""
    if view.pending_delete is None:
        return
    record = view.records.find(view.pending_delete)
    if record is None:
        view.cancel_delete()
        return
    with st.container(border=True):
        st.warning(f"Are you sure you want to delete {describe(record)}? This action cannot be undone.")
        cols = st.columns(2)
        if cols[0].button("Delete", key=f"{key}-confirm-delete", type="primary"):
            view.confirm_delete(owner_id)
            st.rerun()
        if cols[1].button("Cancel", key=f"{key}-cancel-delete"):
            view.cancel_delete()
            st.rerun()
