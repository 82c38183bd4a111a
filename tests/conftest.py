import time

import pytest

from libraryhub import create_app
from libraryhub.config import TestConfig
from libraryhub.session_store import Session, SessionStore
from tests.fakes import BOOKS, PROFILES, FakeDataClient, make_token


@pytest.fixture
def fake_client():
    client = FakeDataClient()
    client.seed("books", BOOKS)
    client.seed("profiles", PROFILES)
    return client


@pytest.fixture
def app(fake_client):
    app = create_app(TestConfig)
    app.extensions["data_client"] = fake_client
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Put a session for ``user_id`` into the test client's cookie."""
    def _login(user_id="user-1", email="ada@example.com", expires_in=3600, refresh_token=None):
        expires_at = int(time.time()) + expires_in
        session = Session(
            access_token=make_token(user_id, email, expires_at),
            user_id=user_id,
            refresh_token=refresh_token,
            email=email,
            expires_at=expires_at,
        )
        with client.session_transaction() as cookie:
            cookie[SessionStore.SESSION_KEY] = session.to_dict()
        return session
    return _login
