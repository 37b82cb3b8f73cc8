"""HTTP client for the remote table store."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Protocol, Sequence

import httpx

from .config import Settings
from .exceptions import GatewayTimeout, TableGatewayError

logger = logging.getLogger(__name__)

Record = dict[str, Any]
QueryValue = Optional[object]


class TableGateway(Protocol):
    """Read/insert/update operations over named tables."""

    def read(
        self,
        table: str,
        query: Optional[Mapping[str, QueryValue]] = None,
        *,
        access_token: str,
    ) -> list[Record]: ...

    def insert(self, table: str, records: Sequence[Record], *, access_token: str) -> Record: ...

    def update(
        self,
        table: str,
        id_value: str,
        updates: Mapping[str, Any],
        *,
        access_token: str,
        id_column: str = "_id",
    ) -> Record: ...


def to_query_params(query: Optional[Mapping[str, QueryValue]]) -> dict[str, str]:
    """Drop ``None`` filters and render booleans the way the store expects."""

    params: dict[str, str] = {}
    for key, value in (query or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        else:
            params[key] = str(value)
    return params


def extract_error_message(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    for key in ("message", "error"):
        if isinstance(data.get(key), str):
            return data[key]
    return None


class RemoteTableGateway:
    """Talks to ``<base>/<database>/{read,insert,update}`` with bearer auth."""

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None) -> None:
        self._settings = settings
        self._client = client or httpx.Client(timeout=settings.request_timeout_seconds)

    def close(self) -> None:
        self._client.close()

    def read(
        self,
        table: str,
        query: Optional[Mapping[str, QueryValue]] = None,
        *,
        access_token: str,
    ) -> list[Record]:
        params = {"tableName": table, **to_query_params(query)}
        status, data = self._send(table, "GET", "read", access_token=access_token, params=params)
        if status != 200:
            raise TableGatewayError(table, status, extract_error_message(data))
        if isinstance(data, list):
            return data
        return []

    def insert(self, table: str, records: Sequence[Record], *, access_token: str) -> Record:
        payload = {"tableName": table, "records": list(records)}
        status, data = self._send(table, "POST", "insert", access_token=access_token, json=payload)
        if status not in (200, 201):
            raise TableGatewayError(table, status, extract_error_message(data))
        return data if isinstance(data, dict) else {}

    def update(
        self,
        table: str,
        id_value: str,
        updates: Mapping[str, Any],
        *,
        access_token: str,
        id_column: str = "_id",
    ) -> Record:
        payload = {
            "tableName": table,
            "idColumn": id_column,
            "idValue": id_value,
            "updates": dict(updates),
        }
        status, data = self._send(table, "PUT", "update", access_token=access_token, json=payload)
        if status not in (200, 201):
            raise TableGatewayError(table, status, extract_error_message(data))
        return data if isinstance(data, dict) else {}

    def login(self, email: str, password: str) -> Record:
        """Exchange credentials for an access token."""

        url = f"{self._settings.auth_base_url}/{self._settings.database_name}/login"
        status, data = self._request("auth", "POST", url, json={"email": email, "password": password})
        if status not in (200, 201):
            raise TableGatewayError("auth", status, extract_error_message(data) or "Login failed")
        return data if isinstance(data, dict) else {}

    def _send(
        self,
        table: str,
        method: str,
        operation: str,
        *,
        access_token: str,
        params: Optional[dict[str, str]] = None,
        json: Optional[Record] = None,
    ) -> tuple[int, Any]:
        database = self._settings.database_name
        primary = f"{self._settings.database_base_url}/{database}/{operation}"
        fallback = f"{self._settings.database_fallback_url}/{database}/{operation}"
        headers = {"Authorization": f"Bearer {access_token}"}

        status, data = self._request(table, method, primary, headers=headers, params=params, json=json)
        if status == 404 and fallback != primary:
            logger.debug("table store returned 404 for %s %s, retrying %s", method, primary, fallback)
            status, data = self._request(table, method, fallback, headers=headers, params=params, json=json)
        return status, data

    def _request(
        self,
        table: str,
        method: str,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, str]] = None,
        json: Optional[Record] = None,
    ) -> tuple[int, Any]:
        logger.debug("%s %s table=%s", method, url, table)
        try:
            response = self._client.request(method, url, headers=headers, params=params, json=json)
        except httpx.TimeoutException as exc:
            raise GatewayTimeout(table, detail="request timed out") from exc
        except httpx.TransportError as exc:
            raise TableGatewayError(table, detail=str(exc)) from exc

        if not response.content:
            return response.status_code, {}
        try:
            return response.status_code, response.json()
        except ValueError as exc:
            raise TableGatewayError(table, response.status_code, "Invalid response from table store") from exc
