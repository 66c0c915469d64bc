"""Shared fixtures: every test gets its own SQLite database."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from finance_tracker import db as db_mod


@pytest.fixture
def store(tmp_path):
    """A fresh table store installed as the process-wide default."""
    table_store = db_mod.TableStore(tmp_path / "tracker.db")
    table_store.init_db()
    db_mod.set_store(table_store)
    yield table_store
    db_mod.set_store(None)


@pytest.fixture
def transaction_payload():
    return {
        'date': '2025-03-05',
        'type': 'Expenditure',
        'name': 'Groceries',
        'category': 'Grocery',
        'method': 'Cash',
        'amount': 120.5,
    }
