from __future__ import annotations

from typing import Optional


class DataServiceError(Exception):
    """Raised when the hosted data service cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    @classmethod
    def from_response(cls, response) -> "DataServiceError":
        message = f"HTTP {response.status_code}"
        code = None
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            # REST errors carry message/code, auth errors carry error/error_description/msg
            message = (
                body.get("message")
                or body.get("error_description")
                or body.get("msg")
                or body.get("error")
                or message
            )
            code = body.get("code") or body.get("error_code")
            if code is not None:
                code = str(code)

        return cls(message, status_code=response.status_code, code=code)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


class AuthError(DataServiceError):
    """Auth endpoint failures: bad credentials, expired refresh token, signup rejected."""
