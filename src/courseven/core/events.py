"""In-process event bus used to tell controllers their caches went stale."""

from __future__ import annotations

import logging
from typing import Callable, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class MembershipJoinedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    group_id: str
    course_id: str


class EnrollmentJoinedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    course_id: str


class ActivityChangedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    course_id: str


AppEvent = Union[MembershipJoinedEvent, EnrollmentJoinedEvent, ActivityChangedEvent]
Listener = Callable[[AppEvent], None]


class AppEventBus:
    """Synchronous publish/subscribe; every listener sees every event."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: AppEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("listener failed for %s", type(event).__name__)

    def dispose(self) -> None:
        self._listeners.clear()
