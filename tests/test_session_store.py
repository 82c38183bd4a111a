import time

import pytest
from flask import session as flask_session

from libraryhub.extensions import session_store
from libraryhub.session_store import (
    SIGNED_IN,
    SIGNED_OUT,
    TOKEN_REFRESHED,
    AuthState,
    Session,
    SessionStore,
)
from tests.fakes import make_token


def _session(user_id="user-1", expires_in=3600, refresh_token=None):
    expires_at = int(time.time()) + expires_in
    return Session(
        access_token=make_token(user_id, "ada@example.com", expires_at),
        user_id=user_id,
        refresh_token=refresh_token,
        email="ada@example.com",
        expires_at=expires_at,
    )


@pytest.fixture
def events():
    seen = []
    unsubscribe = session_store.subscribe(lambda event, s: seen.append((event, s.user_id if s else None)))
    yield seen
    unsubscribe()


def test_state_is_unknown_until_resolved(app):
    with app.test_request_context("/"):
        assert session_store.state is AuthState.UNKNOWN
        assert session_store.current() is None
        assert session_store.state is AuthState.ANONYMOUS


def test_stored_session_is_authenticated(app):
    stored = _session()
    with app.test_request_context("/"):
        flask_session[SessionStore.SESSION_KEY] = stored.to_dict()
        assert session_store.current() == stored
        assert session_store.state is AuthState.AUTHENTICATED
        assert session_store.access_token() == stored.access_token


def test_set_and_clear_notify_listeners(app, events):
    with app.test_request_context("/"):
        session_store.set(_session(), SIGNED_IN)
        assert session_store.state is AuthState.AUTHENTICATED
        session_store.clear()
        assert session_store.state is AuthState.ANONYMOUS
        assert SessionStore.SESSION_KEY not in flask_session

    assert events == [(SIGNED_IN, "user-1"), (SIGNED_OUT, None)]


def test_unsubscribed_listener_is_not_called(app):
    seen = []
    unsubscribe = session_store.subscribe(lambda event, s: seen.append(event))
    unsubscribe()
    unsubscribe()  # second call is harmless
    with app.test_request_context("/"):
        session_store.set(_session())
    assert seen == []


def test_failing_listener_does_not_stop_others(app, events):
    def broken(event, s):
        raise RuntimeError("boom")

    unsubscribe = session_store.subscribe(broken)
    try:
        with app.test_request_context("/"):
            session_store.set(_session())
    finally:
        unsubscribe()
    assert events == [(SIGNED_IN, "user-1")]


def test_expired_session_is_refreshed(app, fake_client, events):
    fake_client.auth.refresh_tokens["refresh-1"] = ("user-1", "ada@example.com")
    expired = _session(expires_in=-60, refresh_token="refresh-1")

    with app.test_request_context("/"):
        flask_session[SessionStore.SESSION_KEY] = expired.to_dict()
        fresh = session_store.current()

        assert fresh is not None
        assert fresh.user_id == "user-1"
        assert fresh.access_token != expired.access_token
        assert not fresh.is_expired()
        assert flask_session[SessionStore.SESSION_KEY]["access_token"] == fresh.access_token

    assert events == [(TOKEN_REFRESHED, "user-1")]


def test_expired_session_with_failing_refresh_becomes_anonymous(app, fake_client, events):
    fake_client.auth.fail_refresh = True
    expired = _session(expires_in=-60, refresh_token="refresh-1")

    with app.test_request_context("/"):
        flask_session[SessionStore.SESSION_KEY] = expired.to_dict()
        assert session_store.current() is None
        assert session_store.state is AuthState.ANONYMOUS
        assert SessionStore.SESSION_KEY not in flask_session

    assert events == [(SIGNED_OUT, None)]


def test_expired_session_without_refresh_token_is_dropped(app, fake_client, events):
    with app.test_request_context("/"):
        flask_session[SessionStore.SESSION_KEY] = _session(expires_in=-60).to_dict()
        assert session_store.current() is None
    assert ("auth", "refresh") not in fake_client.calls
    assert events == [(SIGNED_OUT, None)]


def test_session_from_auth_response_reads_token_claims():
    expires_at = int(time.time()) + 600
    payload = {"access_token": make_token("user-7", "kim@example.com", expires_at), "refresh_token": "r"}
    session = Session.from_auth_response(payload)
    assert session.user_id == "user-7"
    assert session.email == "kim@example.com"
    assert session.expires_at == expires_at


def test_session_from_auth_response_rejects_bad_token():
    with pytest.raises(ValueError):
        Session.from_auth_response({"access_token": "not-a-jwt"})
    with pytest.raises(ValueError):
        Session.from_auth_response({})


def test_session_expiry_leeway():
    session = _session(expires_in=5)
    assert session.is_expired() is False
    assert session.is_expired(leeway=10) is True
    assert Session(access_token="t", user_id="u").is_expired() is False
