"""Tests for the record store gateway and the SQLite table store."""

from __future__ import annotations

import pytest

from finance_tracker import operations as ops
from finance_tracker.operations import Result, gateway_for


def test_create_then_list_round_trip(store, transaction_payload):
    created = ops.add_transaction(transaction_payload, 'user-1')
    assert created.success
    assert created.data['id'] is not None
    assert created.data['user_id'] == 'user-1'

    listed = ops.fetch_transactions('user-1')
    assert listed.success
    [row] = listed.data
    for field, value in transaction_payload.items():
        assert row[field] == value
    assert row['id'] == created.data['id']
    assert row['created_at'] and row['updated_at']


def test_records_are_scoped_to_owner(store, transaction_payload):
    ops.add_transaction(transaction_payload, 'user-1')
    assert ops.fetch_transactions('user-2').data == []


def test_transactions_listed_newest_date_first(store, transaction_payload):
    for day in ('2025-03-01', '2025-03-20', '2025-03-10'):
        ops.add_transaction({**transaction_payload, 'date': day}, 'user-1')
    dates = [row['date'] for row in ops.fetch_transactions('user-1').data]
    assert dates == ['2025-03-20', '2025-03-10', '2025-03-01']


def test_create_only_stores_declared_fields(store):
    result = ops.add_note({'heading': 'Plan', 'content': 'Save more', 'colour': 'red'}, 'user-1')
    assert result.success
    assert 'colour' not in result.data


def test_constraint_violation_returns_failure(store, transaction_payload):
    result = ops.add_transaction({**transaction_payload, 'amount': 0}, 'user-1')
    assert not result.success
    assert result.error
    assert ops.fetch_transactions('user-1').data == []


def test_update_returns_changed_row(store, transaction_payload):
    created = ops.add_transaction(transaction_payload, 'user-1').data
    updated = ops.update_transaction(created['id'], {**transaction_payload, 'amount': 99.0}, 'user-1')
    assert updated.success
    assert updated.data['amount'] == 99.0
    assert updated.data['updated_at'] >= created['updated_at']


def test_update_missing_record_fails(store, transaction_payload):
    result = ops.update_transaction(999, transaction_payload, 'user-1')
    assert not result.success
    assert result.error == 'Transaction not found'


def test_update_other_owners_record_fails(store, transaction_payload):
    created = ops.add_transaction(transaction_payload, 'user-1').data
    result = ops.update_transaction(created['id'], {**transaction_payload, 'name': 'Hijack'}, 'user-2')
    assert not result.success
    assert ops.fetch_transactions('user-1').data[0]['name'] == 'Groceries'


def test_delete_is_scoped_to_owner(store, transaction_payload):
    created = ops.add_transaction(transaction_payload, 'user-1').data
    assert ops.delete_transaction(created['id'], 'user-2').success
    assert len(ops.fetch_transactions('user-1').data) == 1

    assert ops.delete_transaction(created['id'], 'user-1').success
    assert ops.fetch_transactions('user-1').data == []


def test_december_range_rolls_into_next_year(store, transaction_payload):
    for day in ('2024-11-30', '2024-12-01', '2024-12-31', '2025-01-01'):
        ops.add_transaction({**transaction_payload, 'date': day}, 'user-1')
    result = ops.fetch_transactions_by_month_year('user-1', 12, 2024)
    assert result.success
    assert sorted(row['date'] for row in result.data) == ['2024-12-01', '2024-12-31']


def test_month_range_accepts_string_year(store, transaction_payload):
    ops.add_transaction({**transaction_payload, 'date': '2025-02-28'}, 'user-1')
    ops.add_transaction({**transaction_payload, 'date': '2025-03-01'}, 'user-1')
    result = ops.fetch_transactions_by_month_year('user-1', 2, '2025')
    assert [row['date'] for row in result.data] == ['2025-02-28']


def test_budgets_by_month_and_year(store):
    ops.add_budget({'category': 'Food', 'amount': 500, 'month': 'March', 'year': '2025'}, 'user-1')
    ops.add_budget({'category': 'Food', 'amount': 450, 'month': 'April', 'year': '2025'}, 'user-1')
    ops.add_budget({'category': 'Rent', 'amount': 4000, 'month': 'March', 'year': '2024'}, 'user-1')

    result = ops.fetch_budgets_by_month_year('user-1', 'March', 2025)
    assert result.success
    assert [(row['category'], row['amount']) for row in result.data] == [('Food', 500.0)]


def test_duplicate_budget_categories_are_allowed(store):
    budget = {'category': 'Food', 'amount': 100, 'month': 'May', 'year': '2025'}
    assert ops.add_budget(budget, 'user-1').success
    assert ops.add_budget(budget, 'user-1').success
    assert len(ops.fetch_budgets('user-1').data) == 2


def test_asset_notes_are_optional(store):
    result = ops.add_asset({'name': 'Gold', 'amount': 10, 'currency': 'AED'}, 'user-1')
    assert result.success
    assert result.data['notes'] is None


def test_asset_rejects_unknown_currency(store):
    result = ops.add_asset({'name': 'Gold', 'amount': 10, 'currency': 'EUR'}, 'user-1')
    assert not result.success


def test_gateway_for_unknown_type_raises():
    with pytest.raises(KeyError):
        gateway_for('invoice')


def test_unknown_column_is_a_programming_error(store):
    with pytest.raises(ValueError):
        store.select('transactions', equals={'bogus': 1})


def test_result_to_dict():
    assert Result.ok([1]).to_dict() == {'success': True, 'data': [1]}
    assert Result.fail('boom').to_dict() == {'success': False, 'error': 'boom'}


def test_set_store_replaces_and_restores_default(store, monkeypatch, tmp_path):
    from finance_tracker import db as db_mod

    assert db_mod.get_store() is store
    monkeypatch.setattr(db_mod, 'DB_PATH', tmp_path / 'default.db')
    db_mod.set_store(None)
    fallback = db_mod.get_store()
    assert fallback is not store
    assert db_mod.get_store() is fallback
