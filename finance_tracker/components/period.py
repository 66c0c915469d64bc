"""Month/year selectors shared by the period-scoped views."""

from __future__ import annotations

from typing import Tuple

import streamlit as st

from ..periods import current_period, year_options
from ..settings import month_names


def render_period_selector(key: str) -> Tuple[str, str]:
    """Render month and year selectboxes defaulting to today.

    Returns:
        ``(month name, year string)``
    """
    month, year = current_period()
    months = month_names()
    years = year_options()
    cols = st.columns(2)
    selected_month = cols[0].selectbox("Month", months, index=months.index(month), key=f"{key}-month")
    selected_year = cols[1].selectbox(
        "Year", years, index=years.index(year) if year in years else 0, key=f"{key}-year",
    )
    return selected_month, selected_year
