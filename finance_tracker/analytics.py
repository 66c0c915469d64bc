"""Aggregations over transaction, budget and asset records.

Every function here is pure: it takes plain record dicts (as returned by
:mod:`finance_tracker.operations`), never mutates them, and returns empty
or zero results for empty input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from .settings import conversion_rates, month_names

INCOME = 'Income'
EXPENDITURE = 'Expenditure'


@dataclass(frozen=True)
class CategoryComparison:
    category: str
    budget_amount: float
    spent_amount: float
    difference: float
    has_budget: bool
    has_transactions: bool
    is_over_budget: bool
    is_under_budget: bool


@dataclass(frozen=True)
class MethodBreakdown:
    method: str
    income: float
    expenditure: float


@dataclass(frozen=True)
class YearlyTypeSeries:
    labels: List[str]
    series: Dict[str, List[float]] = field(default_factory=dict)

    @property
    def categories(self) -> List[str]:
        return list(self.series)


def sort_key(text: Any) -> tuple:
    """Case-insensitive ordering with the original text as tie-breaker."""
    value = '' if text is None else str(text)
    return (value.casefold(), value)


def _frame(records: Iterable[Mapping[str, Any]], columns: List[str]) -> pd.DataFrame:
    df = pd.DataFrame([dict(r) for r in records])
    for column in columns:
        if column not in df.columns:
            df[column] = pd.Series(dtype=object)
    if df.empty:
        return df[columns]
    df['amount'] = pd.to_numeric(df['amount'], errors='coerce').fillna(0.0)
    return df


def _sum_by(df: pd.DataFrame, key: str) -> Dict[str, float]:
    if df.empty:
        return {}
    grouped = df.groupby(df[key].astype(str), sort=False)['amount'].sum()
    return {str(k): float(v) for k, v in grouped.items()}


def total_assets_in_base_currency(
    assets: Iterable[Mapping[str, Any]],
    rates: Optional[Mapping[str, float]] = None,
) -> float:
    """Sum asset amounts converted with the fixed rate table.

    The rates are static approximations, not live quotes. Unknown
    currencies convert at 1.

    Example:
        >>> total_assets_in_base_currency([
        ...     {'amount': 100, 'currency': 'AED'},
        ...     {'amount': 100, 'currency': 'INR'},
        ...     {'amount': 10, 'currency': '$'},
        ... ])
        141.0
    """
    rates = conversion_rates() if rates is None else dict(rates)
    df = _frame(assets, ['amount', 'currency'])
    if df.empty:
        return 0.0
    factors = df['currency'].map(lambda c: rates.get(c, 1.0)).astype(float)
    return round(float((df['amount'] * factors).sum()), 10)


def budget_total(budgets: Iterable[Mapping[str, Any]]) -> float:
    df = _frame(budgets, ['amount'])
    return float(df['amount'].sum()) if not df.empty else 0.0


def period_totals(transactions: Iterable[Mapping[str, Any]]) -> Dict[str, float]:
    """Income, expenditure and net for a list of transactions."""
    df = _frame(transactions, ['type', 'amount'])
    if df.empty:
        return {'income': 0.0, 'expenditure': 0.0, 'net': 0.0}
    is_income = df['type'] == INCOME
    income = float(df.loc[is_income, 'amount'].sum())
    expenditure = float(df.loc[~is_income, 'amount'].sum())
    return {'income': income, 'expenditure': expenditure, 'net': income - expenditure}


def compare_budget_to_spend(
    budgets: Iterable[Mapping[str, Any]],
    transactions: Iterable[Mapping[str, Any]],
) -> List[CategoryComparison]:
    """Compare budgeted amounts with expenditure per category.

    Income transactions are ignored. Budgets for the same category are
    summed. One row is produced for every category found in either input.
    """
    budget_df = _frame(budgets, ['category', 'amount'])
    txn_df = _frame(transactions, ['category', 'type', 'amount'])
    if not txn_df.empty:
        txn_df = txn_df[txn_df['type'] != INCOME]

    budgeted = _sum_by(budget_df, 'category')
    spent = _sum_by(txn_df, 'category')

    comparison: List[CategoryComparison] = []
    for category in sorted(set(budgeted) | set(spent), key=sort_key):
        budget_amount = budgeted.get(category, 0.0)
        spent_amount = spent.get(category, 0.0)
        difference = budget_amount - spent_amount
        comparison.append(CategoryComparison(
            category=category,
            budget_amount=budget_amount,
            spent_amount=spent_amount,
            difference=difference,
            has_budget=category in budgeted,
            has_transactions=category in spent,
            is_over_budget=difference < 0,
            is_under_budget=difference > 0,
        ))
    return comparison


def breakdown_by_method(transactions: Iterable[Mapping[str, Any]]) -> List[MethodBreakdown]:
    """Income and expenditure totals per payment method, sorted by method."""
    df = _frame(transactions, ['method', 'type', 'amount'])
    if df.empty:
        return []
    df = df.assign(
        method=df['method'].astype(str),
        income=df['amount'].where(df['type'] == INCOME, 0.0),
        expenditure=df['amount'].where(df['type'] != INCOME, 0.0),
    )
    totals = df.groupby('method', sort=False)[['income', 'expenditure']].sum()
    return [
        MethodBreakdown(method=str(method), income=float(row['income']), expenditure=float(row['expenditure']))
        for method, row in sorted(totals.iterrows(), key=lambda item: sort_key(item[0]))
    ]


def series_by_month_and_category(
    transactions: Iterable[Mapping[str, Any]],
    year: Any,
    txn_type: str,
) -> YearlyTypeSeries:
    """Monthly totals per category for one year and one transaction type.

    ``txn_type`` of ``'Income'`` selects income; anything else selects
    every non-income transaction. Months without activity are zero.
    """
    labels = month_names()
    df = _frame(transactions, ['date', 'category', 'type', 'amount'])
    if df.empty:
        return YearlyTypeSeries(labels=labels)

    dates = pd.to_datetime(df['date'], errors='coerce')
    in_year = dates.dt.year == int(year)
    is_income = df['type'] == INCOME
    type_mask = is_income if txn_type == INCOME else ~is_income
    selected = df[in_year & type_mask].assign(month=dates[in_year & type_mask].dt.month - 1)
    if selected.empty:
        return YearlyTypeSeries(labels=labels)

    selected = selected.assign(category=selected['category'].astype(str))
    pivot = (
        selected.pivot_table(index='category', columns='month', values='amount', aggfunc='sum', fill_value=0.0)
        .reindex(columns=range(12), fill_value=0.0)
    )
    series = {
        str(category): [float(v) for v in pivot.loc[category].tolist()]
        for category in sorted(pivot.index, key=sort_key)
    }
    return YearlyTypeSeries(labels=labels, series=series)


def yearly_totals(yearly: YearlyTypeSeries) -> Dict[str, float]:
    """Total across every category and month, plus the average per month.

    The average always divides by 12, including months without activity.
    """
    total = float(sum(sum(values) for values in yearly.series.values()))
    months = len(yearly.labels) or 12
    return {'total': total, 'monthly_average': total / months}


def comparison_totals(comparison: Iterable[CategoryComparison]) -> Dict[str, float]:
    """Total budgeted and total spent across comparison rows."""
    rows = list(comparison)
    budget = float(sum(row.budget_amount for row in rows))
    spent = float(sum(row.spent_amount for row in rows))
    return {'budget': budget, 'spent': spent, 'difference': budget - spent}
