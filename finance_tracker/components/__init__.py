"""Streamlit views for the dashboard."""

from .analytics_views import render_budget_comparison, render_method_breakdown, render_yearly_chart
from .assets_table import render_assets
from .auth_screen import render_auth_screen
from .budget_table import render_budgets
from .notes import render_notes
from .transactions_table import render_transactions

__all__ = [
    'render_assets',
    'render_auth_screen',
    'render_budget_comparison',
    'render_budgets',
    'render_method_breakdown',
    'render_notes',
    'render_transactions',
    'render_yearly_chart',
]
