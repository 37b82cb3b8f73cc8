"""Errors raised below the service layer."""

from typing import Optional


class MissingAccessToken(Exception):
    """Raised before any network call when no bearer token is available."""

    status_code = 401

    def __init__(self, detail: str = "Access token not available") -> None:
        super().__init__(detail)
        self.detail = detail


class TableGatewayError(Exception):
    """Non-2xx or transport failure talking to the table store."""

    status_code = 502

    def __init__(self, table: str, http_status: Optional[int] = None, detail: Optional[str] = None) -> None:
        base = f"Database error ({table})"
        if http_status is not None:
            base = f"{base} - status {http_status}"
        message = f"{base}: {detail}" if detail else base
        super().__init__(message)
        self.table = table
        self.http_status = http_status
        self.detail = message


class GatewayTimeout(TableGatewayError):
    """The table store did not answer within the request timeout."""

    status_code = 504
