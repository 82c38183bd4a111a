from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from libraryhub.remote.auth import AuthClient
from libraryhub.remote.errors import DataServiceError

logger = logging.getLogger(__name__)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _compact_columns(columns: str) -> str:
    return "".join(columns.split())


def _parse_count(content_range: Optional[str]) -> Optional[int]:
    # "0-24/573" or "*/0"
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1]
    if total == "*":
        return None
    try:
        return int(total)
    except ValueError:
        return None


class QueryResult:
    def __init__(self, data: Any = None, count: Optional[int] = None):
        self.data = data
        self.count = count

    def __repr__(self) -> str:
        return f"QueryResult(data={self.data!r}, count={self.count!r})"


class TableQuery:
    """One request against a table endpoint, built up call by call.

    Mirrors the hosted platform's query syntax: filters become
    ``column=eq.value`` parameters, ordering ``order=column.desc``, and
    writes ask for the affected rows back with ``Prefer: return=representation``.
    """

    def __init__(self, client: "DataClient", table: str):
        self._client = client
        self._table = table
        self._method = "GET"
        self._params: List[Tuple[str, str]] = []
        self._body: Any = None
        self._prefer: List[str] = []
        self._single = False
        self._want_count = False

    @property
    def table(self) -> str:
        return self._table

    def select(self, columns: str = "*", count: Optional[str] = None, head: bool = False) -> "TableQuery":
        if self._method == "GET":
            self._method = "HEAD" if head else "GET"
        self._params.append(("select", _compact_columns(columns)))
        if count:
            self._prefer.append(f"count={count}")
            self._want_count = True
        return self

    def insert(self, rows: Any) -> "TableQuery":
        self._method = "POST"
        self._body = rows
        self._prefer.append("return=representation")
        return self

    def update(self, values: Dict[str, Any]) -> "TableQuery":
        self._method = "PATCH"
        self._body = values
        self._prefer.append("return=representation")
        return self

    def delete(self) -> "TableQuery":
        self._method = "DELETE"
        self._prefer.append("return=representation")
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._params.append((column, f"eq.{_format_value(value)}"))
        return self

    def in_(self, column: str, values) -> "TableQuery":
        joined = ",".join(_format_value(v) for v in values)
        self._params.append((column, f"in.({joined})"))
        return self

    def order(self, column: str, desc: bool = False) -> "TableQuery":
        self._params.append(("order", f"{column}.{'desc' if desc else 'asc'}"))
        return self

    def limit(self, count: int) -> "TableQuery":
        self._params.append(("limit", str(int(count))))
        return self

    def single(self) -> "TableQuery":
        self._single = True
        return self

    def execute(self) -> QueryResult:
        headers = {}
        if self._prefer:
            headers["Prefer"] = ",".join(self._prefer)
        if self._single:
            headers["Accept"] = "application/vnd.pgrst.object+json"

        response = self._client.request(
            self._method,
            f"/rest/v1/{self._table}",
            params=self._params,
            json=self._body,
            headers=headers,
        )

        data = None
        if self._method != "HEAD" and response.content:
            try:
                data = response.json()
            except ValueError as e:
                raise DataServiceError(f"Invalid JSON from {self._table}", response.status_code) from e

        count = _parse_count(response.headers.get("Content-Range")) if self._want_count else None
        return QueryResult(data=data, count=count)


class DataClient:
    """Request/response client for the hosted data platform."""

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None, timeout: float = 10.0):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.timeout = timeout
        # set by the session store so rows are read/written as the viewer
        self.token_provider: Optional[Callable[[], Optional[str]]] = None
        # requests.Session is not guaranteed thread-safe: one pool per serving thread
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._sessions_lock = threading.Lock()
        self.auth = AuthClient(self)

    @property
    def _http(self) -> requests.Session:
        http = getattr(self._local, "http", None)
        if http is None:
            http = requests.Session()
            self._local.http = http
            with self._sessions_lock:
                self._sessions.append(http)
        return http

    def init_app(self, app):
        self.base_url = app.config["DATA_SERVICE_URL"].rstrip("/")
        self.api_key = app.config.get("DATA_SERVICE_KEY", "")
        self.timeout = float(app.config.get("DATA_SERVICE_TIMEOUT", 10))
        app.extensions["data_client"] = self

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    def _default_headers(self) -> Dict[str, str]:
        token = self.token_provider() if self.token_provider else None
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {token or self.api_key}",
        }

    def request(self, method: str, path: str, params=None, json=None, headers=None) -> requests.Response:
        url = f"{self.base_url}{path}"
        merged = self._default_headers()
        if headers:
            merged.update(headers)

        logger.debug("[DataClient] %s %s params=%s", method, path, params)
        try:
            response = self._http.request(
                method,
                url,
                params=params,
                json=json,
                headers=merged,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("[DataClient] %s %s failed: %s", method, path, e)
            raise DataServiceError(f"Data service unreachable: {e}") from e

        if response.status_code >= 400:
            err = DataServiceError.from_response(response)
            logger.warning("[DataClient] %s %s rejected: %s", method, path, err)
            raise err

        return response

    def close(self):
        with self._sessions_lock:
            sessions, self._sessions = self._sessions, []
        for http in sessions:
            http.close()
        self._local = threading.local()
