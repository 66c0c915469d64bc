"""Streamlit app for the Finance Tracker.

Routes between the auth screen and the dashboard depending on whether the
browser session is signed in. The dashboard has a Home tab (transactions,
notes, budgets, assets) and an Analytics tab (yearly chart, budget vs
spend, method breakdown).

To run the dashboard from the command line::

    streamlit run finance_tracker/Home.py
"""

from __future__ import annotations

import logging

import streamlit as st

from .components import (
    render_assets,
    render_auth_screen,
    render_budget_comparison,
    render_budgets,
    render_method_breakdown,
    render_notes,
    render_transactions,
    render_yearly_chart,
)
from .config import configure_logging
from .context import AppContext, get_context
from .db import StoreError, get_store

logger = logging.getLogger(__name__)

SIGN_OUT_PENDING = 'finance_tracker_sign_out_pending'


def _render_sign_out(ctx: AppContext) -> None:
    """Sidebar account box with a confirmed sign-out."""
    st.sidebar.subheader("Account")
    st.sidebar.write(ctx.session.email)
    if not st.session_state.get(SIGN_OUT_PENDING):
        if st.sidebar.button("Sign out", use_container_width=True):
            st.session_state[SIGN_OUT_PENDING] = True
            st.rerun()
        return

    st.sidebar.warning("Are you sure you want to sign out?")
    cols = st.sidebar.columns(2)
    if cols[0].button("Sign out", key="confirm-sign-out", type="primary"):
        st.session_state[SIGN_OUT_PENDING] = False
        ctx.auth.sign_out()
        st.rerun()
    if cols[1].button("Cancel", key="cancel-sign-out"):
        st.session_state[SIGN_OUT_PENDING] = False
        st.rerun()


def render_dashboard(ctx: AppContext) -> None:
    _render_sign_out(ctx)
    st.title("💰 Finance Tracker")

    home_tab, analytics_tab = st.tabs(["🏠 Home", "📊 Analytics"])
    with home_tab:
        render_transactions(ctx)
        st.divider()
        notes_col, budgets_col = st.columns(2)
        with notes_col:
            render_notes(ctx)
        with budgets_col:
            render_budgets(ctx)
        st.divider()
        render_assets(ctx)

    with analytics_tab:
        render_yearly_chart(ctx)
        st.divider()
        render_budget_comparison(ctx)
        st.divider()
        render_method_breakdown(ctx)


def main() -> None:
    """Entry point for the Streamlit app."""
    st.set_page_config(
        page_title="Finance Tracker",
        page_icon="💰",
        layout="wide",
    )
    configure_logging()

    try:
        get_store().init_db()
    except StoreError as exc:
        logger.error("Database unavailable: %s", exc)
        st.error(f"Could not open the database: {exc}")
        st.stop()

    ctx = get_context()
    if ctx.session is None:
        render_auth_screen(ctx)
    else:
        render_dashboard(ctx)


if __name__ == "__main__":  # pragma: no cover
    main()
