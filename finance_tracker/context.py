"""Per-browser-session application state.

Streamlit reruns the script on every interaction, so the auth service and
every view's state live in one :class:`AppContext` stored in
``st.session_state``. Views ask the context for their :class:`ListView`
(or any other state object) by key; a sign-out or a change of user drops
all of them. Saves and deletes made through a list view bump
``data_revision``, which the analytics views fold into their load keys.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, MutableMapping, Optional

import streamlit as st

from .auth import SIGNED_OUT, AuthService, Session
from .db import TableStore
from .list_state import ListView
from .operations import gateway_for

logger = logging.getLogger(__name__)

SESSION_KEY = 'finance_tracker_context'


@dataclass
class AppContext:
    auth: AuthService
    store: Optional[TableStore] = None
    views: Dict[str, Any] = field(default_factory=dict)
    data_revision: int = field(default=0, init=False)
    _owner: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.auth.on_auth_state_change(self._on_auth_change)

    @property
    def session(self) -> Optional[Session]:
        return self.auth.session

    @property
    def user_id(self) -> Optional[str]:
        return self.auth.user_id

    def _on_auth_change(self, event: str, session: Optional[Session]) -> None:
        new_owner = session.user_id if session else None
        if event == SIGNED_OUT or new_owner != self._owner:
            logger.info("Auth state changed (%s); clearing view state", event)
            self.views.clear()
        self._owner = new_owner

    def mark_changed(self) -> None:
        """Record that the user's data changed so derived views reload."""
        self.data_revision += 1

    def data_key(self, *parts: Any) -> tuple:
        """Load key for a derived view: its own inputs plus the data revision."""
        return (*parts, self.data_revision)

    def state(self, key: str, factory: Callable[[], Any]) -> Any:
        """Return the state object stored under ``key``, creating it once."""
        if key not in self.views:
            self.views[key] = factory()
        return self.views[key]

    def list_view(self, record_type: str, label: str) -> ListView:
        return self.state(
            f'list:{record_type}',
            lambda: ListView(gateway_for(record_type, self.store), record_type, label, self.mark_changed),
        )


def get_context(
    session_state: Optional[MutableMapping[str, Any]] = None,
    store: Optional[TableStore] = None,
) -> AppContext:
    """Fetch (or create) the context kept in ``session_state``.

    ``session_state`` defaults to ``st.session_state``.
    """
    if session_state is None:
        session_state = st.session_state
    context = session_state.get(SESSION_KEY)
    if context is None:
        context = AppContext(auth=AuthService(store), store=store)
        session_state[SESSION_KEY] = context
    return context
