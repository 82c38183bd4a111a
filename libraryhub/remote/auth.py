from __future__ import annotations

from typing import Any, Dict, Optional

from libraryhub.remote.errors import AuthError, DataServiceError


class AuthClient:
    """Session issuance endpoints of the hosted platform.

    Every call returns the raw JSON payload; turning it into a
    :class:`libraryhub.session_store.Session` is the session store's job.
    """

    def __init__(self, client):
        self._client = client

    def sign_in_with_password(self, email: str, password: str) -> Dict[str, Any]:
        return self._post(
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> Dict[str, Any]:
        return self._post(
            "/auth/v1/signup",
            json={"email": email, "password": password, "data": {"full_name": full_name or ""}},
        )

    def refresh_session(self, refresh_token: str) -> Dict[str, Any]:
        return self._post(
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )

    def sign_out(self, access_token: str) -> None:
        self._post("/auth/v1/logout", headers={"Authorization": f"Bearer {access_token}"})

    def _post(self, path, params=None, json=None, headers=None) -> Dict[str, Any]:
        try:
            response = self._client.request("POST", path, params=params, json=json, headers=headers)
        except DataServiceError as e:
            raise AuthError(e.message, status_code=e.status_code, code=e.code) from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise AuthError("Invalid JSON from auth service", status_code=response.status_code) from e
