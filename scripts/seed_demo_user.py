#!/usr/bin/env python3
"""Create a demo account with a few months of sample records.

Usage::

    python scripts/seed_demo_user.py [email] [password]

Records are written through the gateway, so the same validation and
ownership scoping apply as in the app.
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker import operations as ops
from finance_tracker.auth import AuthService
from finance_tracker.config import configure_logging
from finance_tracker.periods import month_name

DEFAULT_EMAIL = "demo@gmail.com"
DEFAULT_PASSWORD = "demo-password"

MONTHLY_TRANSACTIONS: List[Dict[str, Any]] = [
    {'day': 1, 'type': 'Income', 'name': 'Salary', 'category': 'Savings', 'method': 'Emirates NBD', 'amount': 15000},
    {'day': 2, 'type': 'Expenditure', 'name': 'Rent', 'category': 'Rent', 'method': 'Emirates NBD', 'amount': 5500},
    {'day': 6, 'type': 'Expenditure', 'name': 'Groceries', 'category': 'Grocery', 'method': 'Credit Card', 'amount': 820},
    {'day': 12, 'type': 'Expenditure', 'name': 'Metro card', 'category': 'Transportation', 'method': 'Cash', 'amount': 200},
    {'day': 18, 'type': 'Expenditure', 'name': 'Dinner out', 'category': 'Food', 'method': 'Credit Card', 'amount': 340},
    {'day': 24, 'type': 'Expenditure', 'name': 'Electricity', 'category': 'Utilities', 'method': 'ADCB', 'amount': 410},
]

BUDGETS = {'Rent': 5500, 'Grocery': 900, 'Food': 300, 'Transportation': 250, 'Utilities': 450}

ASSETS: List[Dict[str, Any]] = [
    {'name': 'Emergency fund', 'amount': 20000, 'currency': 'AED', 'notes': 'Six months of expenses'},
    {'name': 'India savings', 'amount': 150000, 'currency': 'INR'},
    {'name': 'Brokerage', 'amount': 4000, 'currency': '$', 'notes': 'Index funds'},
]


def _check(result: ops.Result, what: str) -> None:
    if not result.success:
        raise RuntimeError(f"Failed to add {what}: {result.error}")


def seed(user_id: str, months: int = 3, today: date | None = None) -> int:
    """Write sample records for the last ``months`` months; returns the count."""
    today = today or date.today()
    count = 0
    for offset in range(months):
        month = (today.month - offset - 1) % 12 + 1
        year = today.year - (1 if today.month - offset < 1 else 0)
        for txn in MONTHLY_TRANSACTIONS:
            payload = {k: v for k, v in txn.items() if k != 'day'}
            payload['date'] = date(year, month, txn['day']).isoformat()
            _check(ops.add_transaction(payload, user_id), f"transaction {txn['name']}")
            count += 1
        for category, amount in BUDGETS.items():
            budget = {'category': category, 'amount': amount, 'month': month_name(month), 'year': str(year)}
            _check(ops.add_budget(budget, user_id), f"budget {category}")
            count += 1

    for asset in ASSETS:
        _check(ops.add_asset(asset, user_id), f"asset {asset['name']}")
        count += 1
    _check(ops.add_note({'heading': 'Welcome', 'content': 'This account was filled with sample data.'}, user_id), "note")
    return count + 1


def main(argv: List[str]) -> int:
    configure_logging()
    email = argv[1] if len(argv) > 1 else DEFAULT_EMAIL
    password = argv[2] if len(argv) > 2 else DEFAULT_PASSWORD

    auth = AuthService()
    result = auth.sign_up(email, password)
    if not result.success:
        print(f"Could not create {email}: {result.error}")
        return 1

    count = seed(result.data.user_id)
    print(f"Created {email} with {count} sample records.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
