"""Unit tests for finance_tracker.analytics."""

from __future__ import annotations

import pytest

from finance_tracker import analytics as an


def test_budget_comparison_scenario():
    budgets = [{'category': 'Food', 'amount': 500}]
    transactions = [
        {'category': 'Food', 'amount': 300, 'type': 'Expenditure'},
        {'category': 'Transport', 'amount': 100, 'type': 'Expenditure'},
    ]
    food, transport = an.compare_budget_to_spend(budgets, transactions)

    assert food.category == 'Food'
    assert (food.budget_amount, food.spent_amount, food.difference) == (500, 300, 200)
    assert food.is_under_budget and not food.is_over_budget
    assert food.has_budget and food.has_transactions

    assert transport.category == 'Transport'
    assert (transport.budget_amount, transport.spent_amount, transport.difference) == (0, 100, -100)
    assert transport.is_over_budget
    assert not transport.has_budget


def test_budget_comparison_ignores_income_and_sums_budgets():
    budgets = [
        {'category': 'Food', 'amount': 200},
        {'category': 'Food', 'amount': 100},
        {'category': 'Rent', 'amount': 1000},
    ]
    transactions = [
        {'category': 'Salary', 'amount': 5000, 'type': 'Income'},
        {'category': 'Food', 'amount': 300, 'type': 'Expenditure'},
    ]
    comparison = an.compare_budget_to_spend(budgets, transactions)

    assert [row.category for row in comparison] == ['Food', 'Rent']
    food, rent = comparison
    assert food.budget_amount == 300
    assert food.difference == 0
    assert not food.is_over_budget and not food.is_under_budget
    assert rent.spent_amount == 0
    assert not rent.has_transactions


def test_budget_comparison_sorts_case_insensitively():
    budgets = [{'category': name, 'amount': 1} for name in ('food', 'Bills', 'Zoo', 'apps')]
    assert [row.category for row in an.compare_budget_to_spend(budgets, [])] == ['apps', 'Bills', 'food', 'Zoo']


def test_asset_total_scenario():
    assets = [
        {'amount': 100, 'currency': 'AED'},
        {'amount': 100, 'currency': 'INR'},
        {'amount': 10, 'currency': '$'},
    ]
    assert an.total_assets_in_base_currency(assets) == pytest.approx(141.0)


def test_asset_total_unknown_currency_uses_rate_one():
    assets = [{'amount': 50, 'currency': 'EUR'}]
    assert an.total_assets_in_base_currency(assets) == 50.0


def test_asset_total_with_custom_rates():
    assets = [{'amount': 2, 'currency': 'INR'}]
    assert an.total_assets_in_base_currency(assets, rates={'INR': 0.5}) == 1.0


def test_method_breakdown_scenario():
    transactions = [
        {'method': 'Cash', 'type': 'Income', 'amount': 1000},
        {'method': 'Cash', 'type': 'Expenditure', 'amount': 200},
    ]
    assert an.breakdown_by_method(transactions) == [
        an.MethodBreakdown(method='Cash', income=1000.0, expenditure=200.0),
    ]


def test_method_breakdown_totals_match_inputs():
    transactions = [
        {'method': 'Credit Card', 'type': 'Expenditure', 'amount': 40.5},
        {'method': 'ADCB', 'type': 'Income', 'amount': 300},
        {'method': 'ADCB', 'type': 'Expenditure', 'amount': 12},
        {'method': 'Cash', 'type': 'Expenditure', 'amount': 7.5},
    ]
    breakdown = an.breakdown_by_method(transactions)

    assert [row.method for row in breakdown] == ['ADCB', 'Cash', 'Credit Card']
    assert sum(row.income for row in breakdown) == pytest.approx(300)
    assert sum(row.expenditure for row in breakdown) == pytest.approx(60)


def test_yearly_series_groups_by_month_and_category():
    transactions = [
        {'date': '2025-01-15', 'category': 'Food', 'type': 'Expenditure', 'amount': 10},
        {'date': '2025-01-20', 'category': 'Food', 'type': 'Expenditure', 'amount': 5},
        {'date': '2025-03-02', 'category': 'Rent', 'type': 'Expenditure', 'amount': 100},
        {'date': '2025-03-02', 'category': 'Salary', 'type': 'Income', 'amount': 900},
        {'date': '2024-03-02', 'category': 'Food', 'type': 'Expenditure', 'amount': 77},
    ]
    yearly = an.series_by_month_and_category(transactions, 2025, 'Expenditure')

    assert len(yearly.labels) == 12
    assert yearly.labels[0] == 'January'
    assert yearly.categories == ['Food', 'Rent']
    assert yearly.series['Food'][0] == 15
    assert sum(yearly.series['Food']) == 15
    assert yearly.series['Rent'][2] == 100
    assert all(len(values) == 12 for values in yearly.series.values())


def test_yearly_series_income_only():
    transactions = [
        {'date': '2025-06-01', 'category': 'Salary', 'type': 'Income', 'amount': 900},
        {'date': '2025-06-03', 'category': 'Food', 'type': 'Expenditure', 'amount': 20},
    ]
    yearly = an.series_by_month_and_category(transactions, '2025', 'Income')
    assert yearly.categories == ['Salary']
    assert yearly.series['Salary'][5] == 900


def test_period_totals():
    transactions = [
        {'type': 'Income', 'amount': 1000},
        {'type': 'Expenditure', 'amount': 250},
    ]
    assert an.period_totals(transactions) == {'income': 1000.0, 'expenditure': 250.0, 'net': 750.0}


def test_budget_total():
    assert an.budget_total([{'amount': 100}, {'amount': 50.5}]) == 150.5


def test_empty_inputs():
    assert an.compare_budget_to_spend([], []) == []
    assert an.breakdown_by_method([]) == []
    assert an.total_assets_in_base_currency([]) == 0.0
    assert an.budget_total([]) == 0.0
    assert an.period_totals([]) == {'income': 0.0, 'expenditure': 0.0, 'net': 0.0}
    yearly = an.series_by_month_and_category([], 2025, 'Income')
    assert yearly.series == {}
    assert len(yearly.labels) == 12


def test_derivations_are_pure_and_repeatable():
    budgets = [{'category': 'Food', 'amount': 500}]
    transactions = [{'category': 'Food', 'method': 'Cash', 'type': 'Expenditure', 'amount': 30, 'date': '2025-02-01'}]
    snapshot = [dict(t) for t in transactions]

    assert an.compare_budget_to_spend(budgets, transactions) == an.compare_budget_to_spend(budgets, transactions)
    assert an.breakdown_by_method(transactions) == an.breakdown_by_method(transactions)
    assert an.series_by_month_and_category(transactions, 2025, 'Expenditure') == \
        an.series_by_month_and_category(transactions, 2025, 'Expenditure')
    assert transactions == snapshot


def test_yearly_totals_average_over_twelve_months():
    transactions = [
        {'date': '2025-01-15', 'category': 'Food', 'type': 'Expenditure', 'amount': 15},
        {'date': '2025-03-02', 'category': 'Rent', 'type': 'Expenditure', 'amount': 105},
    ]
    totals = an.yearly_totals(an.series_by_month_and_category(transactions, 2025, 'Expenditure'))
    assert totals['total'] == pytest.approx(120)
    assert totals['monthly_average'] == pytest.approx(10)

    empty = an.yearly_totals(an.series_by_month_and_category([], 2025, 'Income'))
    assert empty == {'total': 0.0, 'monthly_average': 0.0}


def test_comparison_totals_cover_every_row():
    budgets = [{'category': 'Food', 'amount': 500}]
    transactions = [
        {'category': 'Food', 'amount': 300, 'type': 'Expenditure'},
        {'category': 'Transport', 'amount': 100, 'type': 'Expenditure'},
    ]
    totals = an.comparison_totals(an.compare_budget_to_spend(budgets, transactions))
    assert totals == {'budget': 500.0, 'spent': 400.0, 'difference': 100.0}
    assert an.comparison_totals([]) == {'budget': 0.0, 'spent': 0.0, 'difference': 0.0}
