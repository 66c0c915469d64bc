"""Record store gateway.

One request function per entity type and operation. Each call is scoped
by the owning user's id and returns a :class:`Result` instead of raising
on store failures, so views only ever branch on ``result.success``.
"""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from .db import StoreError, TableStore, get_store, utc_now_iso
from .periods import month_date_range

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


@dataclass(frozen=True)
class Result:
    """Tagged outcome of a gateway call."""

    success: bool
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> 'Result':
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> 'Result':
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {'success': True, 'data': self.data}
        return {'success': False, 'error': self.error}


class RecordNotFound(StoreError):
    """No row matched both the record id and the owner."""


@dataclass(frozen=True)
class EntitySpec:
    name: str
    table: str
    fields: Tuple[str, ...]
    order_by: str = 'created_at'


ENTITY_SPECS: Dict[str, EntitySpec] = {
    'transaction': EntitySpec(
        'transaction', 'transactions',
        ('date', 'type', 'name', 'category', 'method', 'amount'),
        order_by='date',
    ),
    'budget': EntitySpec('budget', 'budgets', ('category', 'amount', 'month', 'year')),
    'note': EntitySpec('note', 'notes', ('heading', 'content')),
    'asset': EntitySpec('asset', 'assets', ('name', 'amount', 'currency', 'notes')),
}


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


class EntityGateway:
    """CRUD requests for one entity type against the table store."""

    def __init__(self, spec: EntitySpec, store: Optional[TableStore] = None):
        self.spec = spec
        self._store = store

    @property
    def store(self) -> TableStore:
        return self._store if self._store is not None else get_store()

    def _run(self, action: str, call: Callable[[], Any]) -> Result:
        try:
            return Result.ok(call())
        except (StoreError, sqlite3.Error) as exc:
            logger.error("Error %s %s: %s", action, self.spec.name, exc)
            return Result.fail(str(exc))

    def _order(self) -> List[Tuple[str, bool]]:
        return [(self.spec.order_by, True), ('id', True)]

    def _values(self, payload: Mapping[str, Any]) -> Record:
        return {field: _serialize(payload.get(field)) for field in self.spec.fields}

    def list(self, owner_id: str) -> Result:
        return self._run('fetching', lambda: self.store.select(
            self.spec.table, equals={'user_id': owner_id}, order_by=self._order(),
        ))

    def list_where(
        self,
        owner_id: str,
        *,
        equals: Optional[Mapping[str, Any]] = None,
        gte: Optional[Mapping[str, Any]] = None,
        lt: Optional[Mapping[str, Any]] = None,
    ) -> Result:
        filters = {'user_id': owner_id, **dict(equals or {})}
        return self._run('fetching', lambda: self.store.select(
            self.spec.table, equals=filters, gte=gte, lt=lt, order_by=self._order(),
        ))

    def create(self, payload: Mapping[str, Any], owner_id: str) -> Result:
        values = self._values(payload)
        values['user_id'] = owner_id
        return self._run('adding', lambda: self.store.insert(self.spec.table, values))

    def update(self, record_id: Any, payload: Mapping[str, Any], owner_id: str) -> Result:
        values = self._values(payload)
        values['updated_at'] = utc_now_iso()

        def _update() -> Record:
            row = self.store.update(
                self.spec.table, values, equals={'id': record_id, 'user_id': owner_id},
            )
            if row is None:
                raise RecordNotFound(f"{self.spec.name.capitalize()} not found")
            return row

        return self._run('updating', _update)

    def delete(self, record_id: Any, owner_id: str) -> Result:
        def _delete() -> None:
            self.store.delete(self.spec.table, equals={'id': record_id, 'user_id': owner_id})

        return self._run('deleting', _delete)


class TransactionGateway(EntityGateway):
    def list_by_period(self, owner_id: str, month: int, year: Union[int, str]) -> Result:
        """Transactions dated inside one calendar month (``month`` is 1-12)."""
        start, end = month_date_range(int(month), int(year))
        return self.list_where(owner_id, gte={'date': start}, lt={'date': end})


class BudgetGateway(EntityGateway):
    def list_by_period(self, owner_id: str, month: str, year: Union[int, str]) -> Result:
        """Budgets stored for a month name and year string."""
        return self.list_where(owner_id, equals={'month': month, 'year': str(year)})


_GATEWAY_TYPES = {
    'transaction': TransactionGateway,
    'budget': BudgetGateway,
}


def gateway_for(record_type: str, store: Optional[TableStore] = None) -> EntityGateway:
    """Build the gateway for ``record_type``.

    Raises:
        KeyError: If the record type is unknown
    """
    spec = ENTITY_SPECS[record_type]
    return _GATEWAY_TYPES.get(record_type, EntityGateway)(spec, store)


# Module-level gateways bound to the process-wide store at call time.
_transactions = gateway_for('transaction')
_budgets = gateway_for('budget')
_notes = gateway_for('note')
_assets = gateway_for('asset')


# ------------ ASSET OPERATIONS ------------

def fetch_assets(user_id: str) -> Result:
    return _assets.list(user_id)


def add_asset(asset_data: Mapping[str, Any], user_id: str) -> Result:
    return _assets.create(asset_data, user_id)


def update_asset(asset_id: Any, asset_data: Mapping[str, Any], user_id: str) -> Result:
    return _assets.update(asset_id, asset_data, user_id)


def delete_asset(asset_id: Any, user_id: str) -> Result:
    return _assets.delete(asset_id, user_id)


# ------------ BUDGET OPERATIONS ------------

def fetch_budgets(user_id: str) -> Result:
    return _budgets.list(user_id)


def fetch_budgets_by_month_year(user_id: str, month: str, year: Union[int, str]) -> Result:
    return _budgets.list_by_period(user_id, month, year)


def add_budget(budget_data: Mapping[str, Any], user_id: str) -> Result:
    return _budgets.create(budget_data, user_id)


def update_budget(budget_id: Any, budget_data: Mapping[str, Any], user_id: str) -> Result:
    return _budgets.update(budget_id, budget_data, user_id)


def delete_budget(budget_id: Any, user_id: str) -> Result:
    return _budgets.delete(budget_id, user_id)


# ------------ NOTE OPERATIONS ------------

def fetch_notes(user_id: str) -> Result:
    return _notes.list(user_id)


def add_note(note_data: Mapping[str, Any], user_id: str) -> Result:
    return _notes.create(note_data, user_id)


def update_note(note_id: Any, note_data: Mapping[str, Any], user_id: str) -> Result:
    return _notes.update(note_id, note_data, user_id)


def delete_note(note_id: Any, user_id: str) -> Result:
    return _notes.delete(note_id, user_id)


# ------------ TRANSACTION OPERATIONS ------------

def fetch_transactions(user_id: str) -> Result:
    return _transactions.list(user_id)


def fetch_transactions_by_month_year(user_id: str, month: int, year: Union[int, str]) -> Result:
    return _transactions.list_by_period(user_id, month, year)


def add_transaction(transaction_data: Mapping[str, Any], user_id: str) -> Result:
    return _transactions.create(transaction_data, user_id)


def update_transaction(transaction_id: Any, transaction_data: Mapping[str, Any], user_id: str) -> Result:
    return _transactions.update(transaction_id, transaction_data, user_id)


def delete_transaction(transaction_id: Any, user_id: str) -> Result:
    return _transactions.delete(transaction_id, user_id)
