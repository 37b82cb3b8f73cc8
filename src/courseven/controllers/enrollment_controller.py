"""Student-side enrollment state."""

from __future__ import annotations

from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict

from ..core.events import AppEventBus, EnrollmentJoinedEvent
from ..core.refresh import RefreshManager
from ..repositories import Repositories
from ..schemas import Enrollment
from ..services import enrollment_service
from .base import HANDLED_ERRORS, StateController

ENROLLMENTS_KEY_PREFIX = "enrollments:"


def student_key(user_id: str) -> str:
    return f"{ENROLLMENTS_KEY_PREFIX}student:{user_id}"


class EnrollmentState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    error: Optional[str] = None
    enrollments: tuple[Enrollment, ...] = ()
    last_joined: Optional[Enrollment] = None


class EnrollmentController(StateController[EnrollmentState]):
    def __init__(
        self,
        repos: Repositories,
        event_bus: AppEventBus,
        refresh: RefreshManager,
        get_current_user_id: Callable[[], Optional[str]],
        *,
        ttl_seconds: float = 30.0,
    ) -> None:
        super().__init__(EnrollmentState())
        self._repos = repos
        self._event_bus = event_bus
        self._refresh = refresh
        self._get_current_user_id = get_current_user_id
        self._ttl_seconds = ttl_seconds

    def load_my_enrollments(self, *, force: bool = False) -> None:
        user_id = self._get_current_user_id()
        if not user_id:
            return

        def action() -> None:
            enrollments = self._repos.enrollments.get_enrollments_by_student(user_id)
            self._set_state(enrollments=tuple(e for e in enrollments if e.is_active))

        self._set_state(is_loading=True, error=None)
        try:
            self._refresh.run(student_key(user_id), self._ttl_seconds, action, force=force)
        except HANDLED_ERRORS as exc:
            self._set_error(exc)
        finally:
            self._set_state(is_loading=False)

    def join_by_code(self, join_code: str) -> Optional[Enrollment]:
        user_id = self._get_current_user_id()
        if not user_id:
            self._set_error("User is not authenticated")
            return None

        self._set_state(is_loading=True, error=None)
        try:
            enrollment = enrollment_service.enroll_to_course(self._repos, user_id=user_id, join_code=join_code)
        except HANDLED_ERRORS as exc:
            self._set_error(exc)
            return None
        finally:
            self._set_state(is_loading=False)

        others = tuple(e for e in self.snapshot.enrollments if e.course_id != enrollment.course_id)
        self._set_state(enrollments=(*others, enrollment), last_joined=enrollment)
        self._refresh.invalidate_prefix(ENROLLMENTS_KEY_PREFIX)
        self._event_bus.publish(EnrollmentJoinedEvent(course_id=enrollment.course_id))
        return enrollment
