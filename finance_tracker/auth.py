"""Email/password authentication backed by the table store.

Passwords are hashed with bcrypt. Repeated sign-in failures for one email
lock that email out for a short period. Listeners registered with
:meth:`AuthService.on_auth_state_change` are told about every sign-in and
sign-out, which is how views drop state that belonged to the old user.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

import bcrypt

from .db import StoreError, TableStore, get_store, utc_now_iso
from .operations import Result
from .settings import get_config_value

logger = logging.getLogger(__name__)

SIGNED_IN = 'SIGNED_IN'
SIGNED_OUT = 'SIGNED_OUT'

# bcrypt only looks at the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


class AuthError(Exception):
    """Backend-style authentication failure; ``str(exc)`` is the message."""


@dataclass(frozen=True)
class Session:
    user_id: str
    email: str
    signed_in_at: str


AuthListener = Callable[[str, Optional[Session]], None]


def _auth_setting(key: str, default):
    return get_config_value('options', 'auth', key, default=default)


class AuthService:
    """Sign-up, sign-in and sign-out for one browser session."""

    def __init__(self, store: Optional[TableStore] = None, clock: Callable[[], float] = time.time):
        self._store = store
        self._clock = clock
        self._session: Optional[Session] = None
        self._listeners: List[AuthListener] = []
        self._failures: Dict[str, List[float]] = {}
        self._locked_until: Dict[str, float] = {}

    @property
    def store(self) -> TableStore:
        return self._store if self._store is not None else get_store()

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def user_id(self) -> Optional[str]:
        return self._session.user_id if self._session else None

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Register ``listener(event, session)``; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, event: str) -> None:
        for listener in list(self._listeners):
            listener(event, self._session)

    def _start_session(self, user_id: str, email: str) -> Session:
        self._session = Session(user_id=user_id, email=email, signed_in_at=utc_now_iso())
        self._notify(SIGNED_IN)
        return self._session

    # ------------ sign up ------------

    def sign_up(self, email: str, password: str) -> Result:
        email = (email or '').strip().lower()
        try:
            self._check_new_credentials(email, password)
            if self.store.select('users', equals={'email': email}):
                raise AuthError('User already registered')
            hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')
            user = self.store.insert('users', {
                'id': str(uuid.uuid4()),
                'email': email,
                'password_hash': hashed,
            })
        except (AuthError, StoreError) as exc:
            logger.warning("Sign-up failed for %s: %s", email, exc)
            return Result.fail(str(exc))

        logger.info("Created user %s", user['id'])
        return Result.ok(self._start_session(user['id'], user['email']))

    def _check_new_credentials(self, email: str, password: str) -> None:
        if '@' not in email or email.startswith('@') or email.endswith('@'):
            raise AuthError('Unable to validate email address: invalid format')
        min_length = int(_auth_setting('min_password_length', 6))
        if len(password or '') < min_length:
            raise AuthError(f'Password should be at least {min_length} characters.')
        if len(password.encode('utf-8')) > _BCRYPT_MAX_BYTES:
            raise AuthError(f'Password should be at most {_BCRYPT_MAX_BYTES} bytes.')

    # ------------ sign in ------------

    def sign_in(self, email: str, password: str) -> Result:
        email = (email or '').strip().lower()
        now = self._clock()

        locked_until = self._locked_until.get(email)
        if locked_until and now < locked_until:
            wait_for = int(locked_until - now) + 1
            return Result.fail(f'Too many requests, rate limit exceeded. Try again in {wait_for} seconds.')

        try:
            rows = self.store.select('users', equals={'email': email})
        except StoreError as exc:
            logger.error("Sign-in lookup failed: %s", exc)
            return Result.fail(str(exc))

        user = rows[0] if rows else None
        if user is None or not self._password_matches(password, user['password_hash']):
            self._record_failure(email, now)
            logger.warning("Failed sign-in attempt for %s", email)
            return Result.fail('Invalid login credentials')

        self._failures.pop(email, None)
        self._locked_until.pop(email, None)
        return Result.ok(self._start_session(user['id'], user['email']))

    @staticmethod
    def _password_matches(password: str, password_hash: str) -> bool:
        encoded = (password or '').encode('utf-8')
        if not encoded or len(encoded) > _BCRYPT_MAX_BYTES:
            return False
        return bcrypt.checkpw(encoded, password_hash.encode('utf-8'))

    def _record_failure(self, email: str, now: float) -> None:
        window = float(_auth_setting('failure_window_seconds', 300))
        attempts = [t for t in self._failures.get(email, []) if now - t < window]
        attempts.append(now)
        self._failures[email] = attempts
        if len(attempts) >= int(_auth_setting('max_failed_attempts', 5)):
            self._locked_until[email] = now + float(_auth_setting('lockout_seconds', 60))
            self._failures[email] = []

    # ------------ sign out ------------

    def sign_out(self) -> Result:
        if self._session is None:
            return Result.ok()
        self._session = None
        self._notify(SIGNED_OUT)
        return Result.ok()


# ------------ user-facing messages ------------

def friendly_auth_error(message: Optional[str]) -> str:
    """Map a backend auth message to a fixed user-facing phrase.

    Unrecognised messages pass through unchanged.
    """
    if not message:
        return 'An unexpected error occurred. Please try again.'

    text = message.lower()
    if 'user already registered' in text:
        return 'An account with this email already exists. Please try logging in instead.'
    if any(s in text for s in ('invalid login credentials', 'email not confirmed', 'invalid credentials')):
        return 'Invalid email or password, please check your credentials and try again.'
    if 'email not found' in text or 'user not found' in text:
        return 'No account found with this email, please check your email or sign up.'
    if 'password should be at most' in text or 'password is too long' in text:
        return f'Password is too long, please use at most {_BCRYPT_MAX_BYTES} bytes.'
    if 'weak password' in text or 'password should be at least' in text:
        return 'Password is too weak, please use at least 6 characters.'
    if 'rate limit' in text or 'too many requests' in text:
        return 'Too many attempts, please wait a moment before trying again.'
    if 'password' in text:
        return 'Incorrect password, please try again.'
    if 'email' in text and 'invalid' in text:
        return 'Please enter a valid email address.'
    if 'network' in text or 'connection' in text:
        return 'Network error, please check your connection and try again.'
    return message


def validate_sign_up(email: str, password: str, confirm_password: str) -> Optional[str]:
    """Checks the sign-up screen runs before calling the service."""
    domains = _auth_setting('valid_email_domains', [])
    domain = (email or '').strip().lower().rpartition('@')[2]
    if '@' not in (email or '') or (domains and domain not in domains):
        return 'Please use a valid email address (gmail, outlook, yahoo, etc).'
    if password != confirm_password:
        return 'Passwords do not match.'
    min_length = int(_auth_setting('min_password_length', 6))
    if len(password or '') < min_length:
        return f'Password must be at least {min_length} characters long.'
    if len(password.encode('utf-8')) > _BCRYPT_MAX_BYTES:
        return f'Password must be at most {_BCRYPT_MAX_BYTES} bytes long.'
    return None
