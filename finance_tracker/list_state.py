"""Explicit state for the list/table views.

Streamlit reruns the whole script on every interaction, so each view keeps
one :class:`ListView` in ``st.session_state``. The view owns the loaded
records, the record form and small finite-state values for menus, sorting,
searching and delete confirmation. None of this touches Streamlit, which
keeps the behaviour testable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Union

from .forms import RecordForm
from .operations import EntityGateway, Result

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class SubmissionError(Exception):
    """A save was rejected by the gateway; the form should stay open."""


# ------------ MENU STATE ------------

@dataclass(frozen=True)
class MenuClosed:
    pass


@dataclass(frozen=True)
class MenuOpen:
    record_id: Any


MenuState = Union[MenuClosed, MenuOpen]
MENU_CLOSED = MenuClosed()


def toggle_menu(state: MenuState, record_id: Any) -> MenuState:
    if isinstance(state, MenuOpen) and state.record_id == record_id:
        return MENU_CLOSED
    return MenuOpen(record_id)


# ------------ SORT / SEARCH ------------

@dataclass(frozen=True)
class SortState:
    key: Optional[str] = None
    direction: str = 'asc'

    def toggled(self, key: str) -> 'SortState':
        """Same key ascending flips to descending; anything else sorts ascending."""
        if self.key == key and self.direction == 'asc':
            return SortState(key, 'desc')
        return SortState(key, 'asc')

    @property
    def descending(self) -> bool:
        return self.direction == 'desc'


@dataclass(frozen=True)
class SearchState:
    column: str = 'name'
    term: str = ''


def _sort_value(key: str, value: Any) -> Any:
    if key == 'date':
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            return date.min
    if key == 'amount':
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0
    return '' if value is None else str(value).lower()


def sort_records(records: List[Record], sort: SortState) -> List[Record]:
    if not sort.key:
        return list(records)
    return sorted(records, key=lambda r: _sort_value(sort.key, r.get(sort.key)), reverse=sort.descending)


def filter_records(records: List[Record], search: SearchState) -> List[Record]:
    term = search.term.lower()
    if not term:
        return list(records)
    return [
        r for r in records
        if term in ('' if r.get(search.column) is None else str(r.get(search.column))).lower()
    ]


# ------------ RECORDS ------------

class ViewStatus(Enum):
    LOADING = 'loading'
    READY = 'ready'


class RecordList:
    """Records loaded for one view, with status and a dismissible error.

    ``on_change`` is called after every successful save or delete.
    """

    def __init__(
        self,
        gateway: EntityGateway,
        label: str,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.gateway = gateway
        self.label = label
        self.on_change = on_change
        self.records: List[Record] = []
        self.status = ViewStatus.LOADING
        self.error: Optional[str] = None
        self.loaded_key: Optional[Hashable] = None

    def needs_load(self, key: Hashable) -> bool:
        return self.status is ViewStatus.LOADING or key != self.loaded_key

    def load(self, key: Hashable, fetch: Callable[[], Result]) -> None:
        """Replace the records with ``fetch()`` and remember the dependency key."""
        self.status = ViewStatus.LOADING
        self.error = None
        try:
            result = fetch()
        except Exception:
            logger.exception("Error loading %s", self.label)
            self.error = f"Failed to load {self.label}"
        else:
            if result.success:
                self.records = list(result.data or [])
            else:
                logger.error("Failed to load %s: %s", self.label, result.error)
                self.error = result.error
        finally:
            self.status = ViewStatus.READY
            self.loaded_key = key

    def find(self, record_id: Any) -> Optional[Record]:
        return next((r for r in self.records if r.get('id') == record_id), None)

    def save(self, payload: Mapping[str, Any], owner_id: Optional[str]) -> Record:
        """Create (no ``id``) or update (with ``id``) and merge the returned row.

        Raises:
            SubmissionError: If the user is signed out or the gateway failed
        """
        if not owner_id:
            self.error = 'User not authenticated'
            raise SubmissionError(self.error)

        record_id = payload.get('id')
        try:
            if record_id is None:
                result = self.gateway.create(payload, owner_id)
            else:
                result = self.gateway.update(record_id, payload, owner_id)
        except Exception as exc:
            logger.exception("Error saving %s", self.label)
            self.error = f"Failed to save {self.label}"
            raise SubmissionError(self.error) from exc

        if not result.success:
            logger.error("Failed to save %s: %s", self.label, result.error)
            self.error = result.error
            raise SubmissionError(result.error)

        if record_id is None:
            self.records.insert(0, result.data)
        else:
            self.records = [result.data if r.get('id') == record_id else r for r in self.records]
        self._changed()
        return result.data

    def delete(self, record_id: Any, owner_id: Optional[str]) -> bool:
        """Delete through the gateway; the local row goes only on success."""
        if not owner_id:
            self.error = 'User not authenticated'
            return False
        try:
            result = self.gateway.delete(record_id, owner_id)
        except Exception:
            logger.exception("Error deleting %s", self.label)
            self.error = f"Failed to delete {self.label}"
            return False
        if not result.success:
            logger.error("Failed to delete %s: %s", self.label, result.error)
            self.error = result.error
            return False
        self.records = [r for r in self.records if r.get('id') != record_id]
        self._changed()
        return True

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def dismiss_error(self) -> None:
        self.error = None


# ------------ VIEW ------------

class ListView:
    """Everything one list view keeps between reruns."""

    def __init__(
        self,
        gateway: EntityGateway,
        record_type: str,
        label: str,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.records = RecordList(gateway, label, on_change)
        self.form = RecordForm(record_type)
        self.menu: MenuState = MENU_CLOSED
        self.sort = SortState()
        self.search = SearchState()
        self.pending_delete: Any = None
        self.expanded: Any = None

    # menu
    def toggle_menu(self, record_id: Any) -> None:
        self.menu = toggle_menu(self.menu, record_id)

    def close_menu(self) -> None:
        self.menu = MENU_CLOSED

    def menu_open_for(self, record_id: Any) -> bool:
        return isinstance(self.menu, MenuOpen) and self.menu.record_id == record_id

    # sort / search
    def sort_by(self, key: str) -> None:
        self.sort = self.sort.toggled(key)

    def set_search(self, column: Optional[str] = None, term: Optional[str] = None) -> None:
        self.search = replace(
            self.search,
            column=self.search.column if column is None else column,
            term=self.search.term if term is None else term,
        )

    def visible(self) -> List[Record]:
        return sort_records(filter_records(self.records.records, self.search), self.sort)

    # form
    def open_create(self) -> None:
        self.close_menu()
        self.form.open()

    def open_edit(self, record_id: Any) -> bool:
        self.close_menu()
        record = self.records.find(record_id)
        if record is None:
            return False
        self.form.open(record)
        return True

    def submit(
        self,
        owner_id: Optional[str],
        extra: Optional[Mapping[str, Any]] = None,
    ) -> bool:
        """Submit the open form; ``extra`` is merged into the payload."""
        def _handler(payload: Dict[str, Any]) -> None:
            self.records.save({**payload, **dict(extra or {})}, owner_id)

        return self.form.submit(_handler)

    # delete
    def request_delete(self, record_id: Any) -> None:
        self.close_menu()
        self.pending_delete = record_id

    def cancel_delete(self) -> None:
        self.pending_delete = None

    def confirm_delete(self, owner_id: Optional[str]) -> bool:
        if self.pending_delete is None:
            return False
        record_id = self.pending_delete
        deleted = self.records.delete(record_id, owner_id)
        self.pending_delete = None
        if deleted and self.expanded == record_id:
            self.expanded = None
        return deleted

    # expanded detail panel (assets, notes)
    def expand(self, record_id: Any) -> None:
        self.close_menu()
        self.expanded = record_id

    def collapse(self) -> None:
        self.expanded = None

    def expanded_record(self) -> Optional[Record]:
        return None if self.expanded is None else self.records.find(self.expanded)
