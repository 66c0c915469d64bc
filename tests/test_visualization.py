"""Tests for the plotly chart builders."""

from __future__ import annotations

from finance_tracker import visualization as viz
from finance_tracker.analytics import (
    breakdown_by_method,
    compare_budget_to_spend,
    series_by_month_and_category,
)


def test_empty_inputs_produce_placeholder_figures():
    empty_yearly = series_by_month_and_category([], 2025, 'Income')
    for fig in (
        viz.create_yearly_category_chart(empty_yearly),
        viz.create_budget_comparison_chart([]),
        viz.create_method_breakdown_chart([]),
    ):
        assert fig.layout.title.text == "No data to display"
        assert len(fig.data) == 0


def test_yearly_chart_has_one_stacked_trace_per_category():
    yearly = series_by_month_and_category([
        {'date': '2025-01-15', 'category': 'Food', 'type': 'Expenditure', 'amount': 10},
        {'date': '2025-02-15', 'category': 'Rent', 'type': 'Expenditure', 'amount': 100},
    ], 2025, 'Expenditure')
    fig = viz.create_yearly_category_chart(yearly, title="Spend")

    assert [trace.name for trace in fig.data] == ['Food', 'Rent']
    assert fig.layout.barmode == 'stack'
    assert fig.layout.title.text == "Spend"
    assert list(fig.data[0].y)[0] == 10


def test_budget_chart_groups_budget_and_spent():
    comparison = compare_budget_to_spend(
        [{'category': 'Food', 'amount': 500}],
        [{'category': 'Food', 'amount': 300, 'type': 'Expenditure'}],
    )
    fig = viz.create_budget_comparison_chart(comparison)
    assert sorted(trace.name for trace in fig.data) == ['Budget', 'Spent']
    assert fig.layout.barmode == 'group'


def test_method_chart_groups_income_and_expenditure():
    breakdown = breakdown_by_method([
        {'method': 'Cash', 'type': 'Income', 'amount': 1000},
        {'method': 'Cash', 'type': 'Expenditure', 'amount': 200},
    ])
    fig = viz.create_method_breakdown_chart(breakdown)
    assert sorted(trace.name for trace in fig.data) == ['Expenditure', 'Income']
