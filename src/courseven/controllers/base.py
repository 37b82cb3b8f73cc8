"""Observable state holder shared by the controllers."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar, Union

from pydantic import BaseModel

from ..core.exceptions import MissingAccessToken, TableGatewayError
from ..services.assessment_service import AssessmentRuleViolation
from ..services.enrollment_service import EnrollmentRuleViolation
from ..services.membership_service import MembershipRuleViolation

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT", bound=BaseModel)

HANDLED_ERRORS = (
    MissingAccessToken,
    TableGatewayError,
    AssessmentRuleViolation,
    EnrollmentRuleViolation,
    MembershipRuleViolation,
)


def error_message(error: Union[BaseException, str]) -> str:
    if isinstance(error, str):
        return error
    detail = getattr(error, "detail", None)
    if isinstance(detail, str) and detail:
        return detail
    return str(error) or type(error).__name__


class StateController(Generic[StateT]):
    """Keeps an immutable snapshot and tells listeners whenever it is replaced."""

    def __init__(self, initial_state: StateT) -> None:
        self._state = initial_state
        self._listeners: list[Callable[[], None]] = []

    @property
    def snapshot(self) -> StateT:
        return self._state

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear_error(self) -> None:
        self._set_state(error=None)

    def _set_state(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)
        self._notify()

    def _set_error(self, error: Union[BaseException, str]) -> None:
        message = error_message(error)
        logger.warning("%s: %s", type(self).__name__, message)
        self._set_state(error=message)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("state listener failed in %s", type(self).__name__)
