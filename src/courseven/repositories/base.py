"""Shared plumbing for table-backed repositories."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from ..core.exceptions import MissingAccessToken, TableGatewayError
from ..core.gateway import QueryValue, Record, TableGateway

logger = logging.getLogger(__name__)

AccessTokenProvider = Callable[[], Optional[str]]


def extract_updated_record(response: Mapping[str, Any]) -> Optional[Record]:
    """Probe the shapes an update response may take: ``updated``, ``data``, ``inserted``."""

    updated = response.get("updated")
    if isinstance(updated, list) and updated:
        return updated[0]
    data = response.get("data")
    if isinstance(data, dict) and data:
        return data
    inserted = response.get("inserted")
    if isinstance(inserted, list) and inserted:
        return inserted[0]
    return None


def skipped_reason(response: Mapping[str, Any]) -> Optional[str]:
    skipped = response.get("skipped")
    if not isinstance(skipped, list):
        return None
    for entry in skipped:
        if isinstance(entry, dict) and entry.get("reason"):
            return str(entry["reason"])
    return None


class TableRepository:
    """Base class binding a repository to one table of the store."""

    table: str = ""

    def __init__(self, gateway: TableGateway, get_access_token: Optional[AccessTokenProvider] = None) -> None:
        self._gateway = gateway
        self._get_access_token = get_access_token

    def _require_token(self) -> str:
        token = self._get_access_token() if self._get_access_token else None
        if not token:
            raise MissingAccessToken()
        return token

    def _read(self, query: Optional[Mapping[str, QueryValue]] = None) -> list[Record]:
        token = self._require_token()
        return self._gateway.read(self.table, query, access_token=token)

    def _read_first(self, query: Mapping[str, QueryValue]) -> Optional[Record]:
        rows = self._read(query)
        return rows[0] if rows else None

    def _insert_one(self, record: Record) -> Record:
        token = self._require_token()
        response = self._gateway.insert(self.table, [record], access_token=token)
        inserted = response.get("inserted")
        if not isinstance(inserted, list) or not inserted:
            reason = skipped_reason(response)
            raise TableGatewayError(self.table, detail=reason or "Insert returned no records")
        return inserted[0]

    def _update(self, record_id: str, updates: Mapping[str, Any]) -> Optional[Record]:
        """Apply ``updates`` and return the updated record, re-reading it when the response has none."""

        token = self._require_token()
        response = self._gateway.update(self.table, record_id, updates, access_token=token)
        updated = extract_updated_record(response)
        if updated is not None:
            return updated
        logger.debug("update on %s returned no record, re-reading %s", self.table, record_id)
        return self._read_first({"_id": record_id})
