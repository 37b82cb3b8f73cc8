"""Access token providers handed to repositories."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol

from .exceptions import MissingAccessToken, TableGatewayError
from .gateway import Record

logger = logging.getLogger(__name__)

READONLY_TOKEN_TTL_SECONDS = 5 * 60


class SupportsLogin(Protocol):
    def login(self, email: str, password: str) -> Record: ...


class StaticTokenProvider:
    """Always returns the token it was built with (for example a request's bearer token)."""

    def __init__(self, token: Optional[str]) -> None:
        self._token = token

    def __call__(self) -> Optional[str]:
        return self._token


class ReadonlyTokenProvider:
    """Logs in with the read-only account and caches the token for five minutes."""

    def __init__(
        self,
        gateway: SupportsLogin,
        email: Optional[str],
        password: Optional[str],
        *,
        ttl_seconds: float = READONLY_TOKEN_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._gateway = gateway
        self._email = email
        self._password = password
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._token: Optional[str] = None
        self._fetched_at = 0.0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            if self._token and self._clock() - self._fetched_at < self._ttl_seconds:
                return self._token

            if not self._email or not self._password:
                raise MissingAccessToken("Read-only credentials are not configured")

            response = self._gateway.login(self._email, self._password)
            token = response.get("accessToken") or response.get("access_token")
            if not token:
                raise TableGatewayError("auth", detail="Login response did not include an access token")

            logger.debug("refreshed read-only access token")
            self._token = str(token)
            self._fetched_at = self._clock()
            return self._token

    def clear(self) -> None:
        with self._lock:
            self._token = None
