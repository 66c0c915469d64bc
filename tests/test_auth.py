"""Tests for sign-up, sign-in, lockout and the auth message mapping."""

from __future__ import annotations

import pytest

from finance_tracker.auth import (
    SIGNED_IN,
    SIGNED_OUT,
    AuthService,
    friendly_auth_error,
    validate_sign_up,
)


class FakeClock:
    def __init__(self, now=1_000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def auth(store, clock):
    return AuthService(store, clock=clock)


def test_sign_up_starts_session(auth):
    result = auth.sign_up('Someone@Gmail.com', 'secret1')
    assert result.success
    assert result.data.email == 'someone@gmail.com'
    assert auth.user_id == result.data.user_id


def test_password_is_stored_hashed(auth, store):
    auth.sign_up('a@gmail.com', 'secret1')
    [user] = store.select('users', equals={'email': 'a@gmail.com'})
    assert user['password_hash'] != 'secret1'
    assert user['password_hash'].startswith('$2')


def test_duplicate_sign_up_fails(auth):
    auth.sign_up('a@gmail.com', 'secret1')
    result = auth.sign_up('A@gmail.com', 'another1')
    assert not result.success
    assert result.error == 'User already registered'


@pytest.mark.parametrize("email,password,fragment", [
    ('not-an-email', 'secret1', 'invalid format'),
    ('a@gmail.com', 'short', 'at least 6'),
    ('a@gmail.com', 'x' * 80, 'at most 72'),
])
def test_sign_up_rejects_bad_credentials(auth, email, password, fragment):
    result = auth.sign_up(email, password)
    assert not result.success
    assert fragment in result.error
    assert auth.session is None


def test_sign_in_with_correct_and_wrong_password(auth):
    user_id = auth.sign_up('a@gmail.com', 'secret1').data.user_id
    auth.sign_out()

    wrong = auth.sign_in('a@gmail.com', 'nope-nope')
    assert not wrong.success
    assert wrong.error == 'Invalid login credentials'

    right = auth.sign_in(' A@gmail.com ', 'secret1')
    assert right.success
    assert right.data.user_id == user_id


def test_sign_in_unknown_user(auth):
    result = auth.sign_in('ghost@gmail.com', 'secret1')
    assert result.error == 'Invalid login credentials'


def test_repeated_failures_lock_the_account(auth, clock):
    auth.sign_up('a@gmail.com', 'secret1')
    auth.sign_out()

    for _ in range(5):
        clock.now += 1
        assert auth.sign_in('a@gmail.com', 'wrong-pass').error == 'Invalid login credentials'

    locked = auth.sign_in('a@gmail.com', 'secret1')
    assert not locked.success
    assert 'rate limit' in locked.error

    clock.now += 61
    assert auth.sign_in('a@gmail.com', 'secret1').success


def test_failures_outside_window_do_not_lock(auth, clock):
    auth.sign_up('a@gmail.com', 'secret1')
    auth.sign_out()

    for _ in range(6):
        clock.now += 301
        auth.sign_in('a@gmail.com', 'wrong-pass')

    assert auth.sign_in('a@gmail.com', 'secret1').success


def test_listeners_hear_sign_in_and_sign_out(auth):
    events = []
    unsubscribe = auth.on_auth_state_change(lambda event, session: events.append((event, session)))

    session = auth.sign_up('a@gmail.com', 'secret1').data
    auth.sign_out()
    assert events == [(SIGNED_IN, session), (SIGNED_OUT, None)]

    unsubscribe()
    auth.sign_in('a@gmail.com', 'secret1')
    assert len(events) == 2


def test_sign_out_without_session_is_quiet(auth):
    events = []
    auth.on_auth_state_change(lambda event, session: events.append(event))
    assert auth.sign_out().success
    assert events == []


@pytest.mark.parametrize("message,expected", [
    ('User already registered', 'An account with this email already exists. Please try logging in instead.'),
    ('Invalid login credentials', 'Invalid email or password, please check your credentials and try again.'),
    ('User not found', 'No account found with this email, please check your email or sign up.'),
    ('Password should be at least 6 characters.', 'Password is too weak, please use at least 6 characters.'),
    ('Password should be at most 72 bytes.', 'Password is too long, please use at most 72 bytes.'),
    ('Too many requests, rate limit exceeded. Try again in 30 seconds.',
     'Too many attempts, please wait a moment before trying again.'),
    ('Wrong password', 'Incorrect password, please try again.'),
    ('Unable to validate email address: invalid format', 'Please enter a valid email address.'),
    ('Network request failed', 'Network error, please check your connection and try again.'),
    ('Something odd happened', 'Something odd happened'),
    (None, 'An unexpected error occurred. Please try again.'),
    ('', 'An unexpected error occurred. Please try again.'),
])
def test_friendly_auth_error(message, expected):
    assert friendly_auth_error(message) == expected


def test_validate_sign_up():
    assert validate_sign_up('a@example.com', 'secret1', 'secret1').startswith('Please use a valid email')
    assert validate_sign_up('no-at-sign', 'secret1', 'secret1').startswith('Please use a valid email')
    assert validate_sign_up('a@gmail.com', 'secret1', 'secret2') == 'Passwords do not match.'
    assert validate_sign_up('a@gmail.com', 'abc', 'abc') == 'Password must be at least 6 characters long.'
    assert validate_sign_up('a@gmail.com', 'x' * 80, 'x' * 80) == 'Password must be at most 72 bytes long.'
    assert validate_sign_up('a@outlook.com', 'secret1', 'secret1') is None


def test_long_password_error_reads_as_too_long(auth):
    result = auth.sign_up('a@gmail.com', 'x' * 80)
    assert friendly_auth_error(result.error) == 'Password is too long, please use at most 72 bytes.'
