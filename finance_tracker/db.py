"""SQLite-backed table store.

The store mirrors the surface of a hosted table API: filtered select
(equality, half-open range, ordering), insert returning the new row,
update returning the changed row, and delete. Ownership scoping is the
caller's job; every gateway call passes ``user_id`` in ``equals``.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .config import DB_PATH, ensure_data_directories

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    date TEXT NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('Income', 'Expenditure')),
    name TEXT NOT NULL,
    category TEXT NOT NULL,
    method TEXT NOT NULL,
    amount REAL NOT NULL CHECK (amount > 0),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS budgets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    category TEXT NOT NULL,
    amount REAL NOT NULL CHECK (amount > 0),
    month TEXT NOT NULL,
    year TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    heading TEXT NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS assets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL,
    amount REAL NOT NULL CHECK (amount > 0),
    currency TEXT NOT NULL CHECK (currency IN ('AED', 'INR', '$')),
    notes TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_txn_user_date ON transactions (user_id, date);
CREATE INDEX IF NOT EXISTS ix_budget_user_period ON budgets (user_id, year, month);
CREATE INDEX IF NOT EXISTS ix_note_user ON notes (user_id);
CREATE INDEX IF NOT EXISTS ix_asset_user ON assets (user_id);
"""

# Column whitelist per table; identifiers are interpolated into SQL so
# nothing outside this map may reach a statement.
TABLE_COLUMNS: Dict[str, Tuple[str, ...]] = {
    'users': ('id', 'email', 'password_hash', 'created_at'),
    'transactions': (
        'id', 'user_id', 'date', 'type', 'name', 'category', 'method', 'amount',
        'created_at', 'updated_at',
    ),
    'budgets': ('id', 'user_id', 'category', 'amount', 'month', 'year', 'created_at', 'updated_at'),
    'notes': ('id', 'user_id', 'heading', 'content', 'created_at', 'updated_at'),
    'assets': ('id', 'user_id', 'name', 'amount', 'currency', 'notes', 'created_at', 'updated_at'),
}

OrderBy = Sequence[Tuple[str, bool]]


class StoreError(Exception):
    """Raised when the underlying database rejects or fails a statement."""


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _check_columns(table: str, columns: Sequence[str]) -> None:
    if table not in TABLE_COLUMNS:
        raise ValueError(f"Unknown table: {table}")
    unknown = [c for c in columns if c not in TABLE_COLUMNS[table]]
    if unknown:
        raise ValueError(f"Unknown column(s) for {table}: {', '.join(unknown)}")


class TableStore:
    """Row store with user-scoped CRUD over the tracker tables."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        self.db_path = Path(db_path) if db_path is not None else DB_PATH
        self._initialized = False

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        if self.db_path == DB_PATH:
            ensure_data_directories()
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def init_db(self) -> None:
        if self._initialized:
            return
        try:
            with self.connect() as conn:
                conn.executescript(SCHEMA_SQL)
                conn.commit()
        except sqlite3.Error as exc:
            raise StoreError(f"Could not initialise database at {self.db_path}: {exc}") from exc
        self._initialized = True
        logger.debug("Database ready at %s", self.db_path)

    def _execute(self, sql: str, params: Sequence[Any]) -> Tuple[List[Dict[str, Any]], int, Optional[int]]:
        self.init_db()
        try:
            with self.connect() as conn:
                cursor = conn.execute(sql, list(params))
                rows = [dict(row) for row in cursor.fetchall()]
                conn.commit()
                return rows, cursor.rowcount, cursor.lastrowid
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc

    def select(
        self,
        table: str,
        *,
        equals: Optional[Mapping[str, Any]] = None,
        gte: Optional[Mapping[str, Any]] = None,
        lt: Optional[Mapping[str, Any]] = None,
        order_by: OrderBy = (),
    ) -> List[Dict[str, Any]]:
        """Select rows matching every filter.

        ``order_by`` is a sequence of ``(column, descending)`` pairs.
        """
        equals = dict(equals or {})
        gte = dict(gte or {})
        lt = dict(lt or {})
        _check_columns(table, [*equals, *gte, *lt, *(col for col, _ in order_by)])

        where: List[str] = []
        params: List[Any] = []
        for column, value in equals.items():
            where.append(f"{column} = ?")
            params.append(value)
        for column, value in gte.items():
            where.append(f"{column} >= ?")
            params.append(value)
        for column, value in lt.items():
            where.append(f"{column} < ?")
            params.append(value)

        sql = f"SELECT * FROM {table}"
        if where:
            sql += " WHERE " + " AND ".join(where)
        if order_by:
            sql += " ORDER BY " + ", ".join(
                f"{column} {'DESC' if descending else 'ASC'}" for column, descending in order_by
            )
        rows, _, _ = self._execute(sql, params)
        return rows

    def insert(self, table: str, values: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored."""
        values = dict(values)
        columns = TABLE_COLUMNS.get(table, ())
        now = utc_now_iso()
        if 'created_at' in columns:
            values.setdefault('created_at', now)
        if 'updated_at' in columns:
            values.setdefault('updated_at', now)
        _check_columns(table, list(values))

        names = list(values)
        sql = (
            f"INSERT INTO {table} ({', '.join(names)}) "
            f"VALUES ({', '.join('?' for _ in names)})"
        )
        _, _, lastrowid = self._execute(sql, [values[n] for n in names])

        key = values['id'] if 'id' in values else lastrowid
        rows = self.select(table, equals={'id': key})
        if not rows:
            raise StoreError(f"Inserted row {key} could not be read back from {table}")
        return rows[0]

    def update(
        self,
        table: str,
        values: Mapping[str, Any],
        *,
        equals: Mapping[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Update rows matching ``equals`` and return the first changed row.

        Returns ``None`` when nothing matched.
        """
        values = dict(values)
        if not values:
            raise ValueError("Nothing to update")
        if not equals:
            raise ValueError("Refusing to update without a filter")
        _check_columns(table, [*values, *equals])

        assignments = ", ".join(f"{column} = ?" for column in values)
        conditions = " AND ".join(f"{column} = ?" for column in equals)
        sql = f"UPDATE {table} SET {assignments} WHERE {conditions}"
        _, rowcount, _ = self._execute(sql, [*values.values(), *equals.values()])
        if rowcount == 0:
            return None
        rows = self.select(table, equals=equals)
        return rows[0] if rows else None

    def delete(self, table: str, *, equals: Mapping[str, Any]) -> int:
        """Delete rows matching ``equals``; returns the number removed."""
        if not equals:
            raise ValueError("Refusing to delete without a filter")
        _check_columns(table, list(equals))
        conditions = " AND ".join(f"{column} = ?" for column in equals)
        _, rowcount, _ = self._execute(f"DELETE FROM {table} WHERE {conditions}", list(equals.values()))
        return rowcount


_default_store: Optional[TableStore] = None


def get_store() -> TableStore:
    """Return the process-wide store bound to ``DB_PATH``."""
    global _default_store
    if _default_store is None:
        _default_store = TableStore()
    return _default_store


def set_store(store: Optional[TableStore]) -> None:
    """Replace the process-wide store; ``None`` restores the lazy default."""
    global _default_store
    _default_store = store
