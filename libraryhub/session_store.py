"""Process-wide session store.

Every view asks this store for the viewer's session instead of reading the
cookie on its own, and anything that has to follow sign-in/sign-out (the
navigation header, for one) subscribes to its change notifications.

The session itself lives in Flask's signed cookie session; the store resolves
it once per request and caches the result on ``flask.g``. An expired session
is refreshed with its refresh token; when that fails the viewer becomes
anonymous and listeners receive ``SIGNED_OUT``.
"""
from __future__ import annotations

import enum
import threading
import time
from dataclasses import asdict, dataclass, fields
from typing import Callable, List, Optional

import jwt
from flask import current_app, g, has_request_context
from flask import session as flask_session

from libraryhub.remote.errors import DataServiceError

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"


class AuthState(enum.Enum):
    UNKNOWN = "unknown"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass
class Session:
    access_token: str
    user_id: str
    refresh_token: Optional[str] = None
    email: Optional[str] = None
    expires_at: int = 0  # epoch seconds, 0 = no expiry known

    def is_expired(self, leeway: int = 0, now: Optional[float] = None) -> bool:
        if not self.expires_at:
            return False
        now = time.time() if now is None else now
        return now >= self.expires_at - leeway

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "Session":
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    @classmethod
    def from_auth_response(cls, payload: dict) -> "Session":
        token = payload.get("access_token")
        if not token:
            raise ValueError("Auth response carries no access token")

        # claims only; the data service checks the signature on every call
        try:
            claims = jwt.decode(token, options={"verify_signature": False})
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Malformed access token: {e}") from e

        user = payload.get("user") or {}
        user_id = user.get("id") or claims.get("sub")
        if not user_id:
            raise ValueError("Access token has no subject")

        expires_at = payload.get("expires_at") or claims.get("exp")
        if not expires_at and payload.get("expires_in"):
            expires_at = int(time.time()) + int(payload["expires_in"])

        return cls(
            access_token=token,
            user_id=str(user_id),
            refresh_token=payload.get("refresh_token"),
            email=user.get("email") or claims.get("email"),
            expires_at=int(expires_at or 0),
        )


Listener = Callable[[str, Optional[Session]], None]


class SessionStore:
    SESSION_KEY = "auth_session"

    def __init__(self):
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def init_app(self, app):
        app.extensions["session_store"] = self

    # -----------------------------
    # Subscription
    # -----------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str, session: Optional[Session]):
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event, session)
            except Exception as ex:
                current_app.logger.exception(f"[SessionStore] listener failed on {event}: {ex}")

    # -----------------------------
    # Current session
    # -----------------------------
    @property
    def state(self) -> AuthState:
        if not has_request_context():
            return AuthState.UNKNOWN
        return g.get("auth_state", AuthState.UNKNOWN)

    def current(self) -> Optional[Session]:
        if "auth_state" in g:
            return g.get("auth_session")

        raw = flask_session.get(self.SESSION_KEY)
        session = Session.from_dict(raw) if raw else None

        leeway = current_app.config.get("SESSION_REFRESH_LEEWAY", 0)
        if session is not None and session.is_expired(leeway=leeway):
            return self._refresh(session)

        self._resolve(session)
        return session

    def access_token(self) -> Optional[str]:
        if not has_request_context():
            return None
        session = self.current()
        return session.access_token if session else None

    def set(self, session: Session, event: str = SIGNED_IN):
        flask_session[self.SESSION_KEY] = session.to_dict()
        self._resolve(session)
        current_app.logger.info(f"[SessionStore] {event} user={session.user_id}")
        self._emit(event, session)

    def clear(self, event: str = SIGNED_OUT):
        flask_session.pop(self.SESSION_KEY, None)
        self._resolve(None)
        current_app.logger.info(f"[SessionStore] {event}")
        self._emit(event, None)

    def _resolve(self, session: Optional[Session]):
        g.auth_session = session
        g.auth_state = AuthState.AUTHENTICATED if session else AuthState.ANONYMOUS

    def _refresh(self, expired: Session) -> Optional[Session]:
        # anonymous while refreshing so the refresh call goes out with the anon key
        self._resolve(None)

        if not expired.refresh_token:
            self.clear(SIGNED_OUT)
            return None

        try:
            payload = current_app.extensions["data_client"].auth.refresh_session(expired.refresh_token)
            fresh = Session.from_auth_response(payload)
        except (DataServiceError, ValueError) as ex:
            current_app.logger.info(f"[SessionStore] session expired, refresh failed: {ex}")
            self.clear(SIGNED_OUT)
            return None

        self.set(fresh, TOKEN_REFRESHED)
        return fresh
