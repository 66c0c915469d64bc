"""Login / Sign Up screen shown while no session exists."""

from __future__ import annotations

import streamlit as st

from ..auth import friendly_auth_error, validate_sign_up
from ..context import AppContext


def _render_login(ctx: AppContext) -> None:
    with st.form("login-form"):
        email = st.text_input("Email", placeholder="you@example.com")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", type="primary", use_container_width=True)
    if not submitted:
        return
    if not email or not password:
        st.error("Please enter your email and password.")
        return
    with st.spinner("Signing in..."):
        result = ctx.auth.sign_in(email, password)
    if not result.success:
        st.error(friendly_auth_error(result.error))
        return
    st.rerun()


def _render_sign_up(ctx: AppContext) -> None:
    with st.form("signup-form"):
        email = st.text_input("Email", placeholder="you@example.com")
        password = st.text_input("Password", type="password")
        confirm = st.text_input("Confirm password", type="password")
        submitted = st.form_submit_button("Sign Up", type="primary", use_container_width=True)
    if not submitted:
        return
    problem = validate_sign_up(email, password, confirm)
    if problem:
        st.error(problem)
        return
    with st.spinner("Creating your account..."):
        result = ctx.auth.sign_up(email, password)
    if not result.success:
        st.error(friendly_auth_error(result.error))
        return
    st.success("Account created. Welcome!")
    st.rerun()


def render_auth_screen(ctx: AppContext) -> None:
    st.title("💰 Finance Tracker")
    st.caption("Track transactions, budgets, notes and assets in one place.")
    login_tab, signup_tab = st.tabs(["Login", "Sign Up"])
    with login_tab:
        _render_login(ctx)
    with signup_tab:
        _render_sign_up(ctx)
