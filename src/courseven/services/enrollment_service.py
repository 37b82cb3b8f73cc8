"""Joining a course through its join code."""

from __future__ import annotations

import logging

from ..repositories import Repositories
from ..schemas import Enrollment
from ..utils.datetime import utc_now_iso
from .assignment_service import assign_on_enrollment

logger = logging.getLogger(__name__)


class EnrollmentRuleViolation(Exception):
    """Raised when an enrollment request breaks a course rule."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class InvalidJoinCode(EnrollmentRuleViolation):
    def __init__(self) -> None:
        super().__init__("Invalid join code or inactive course", status_code=404)


def enroll_to_course(repos: Repositories, *, user_id: str, join_code: str) -> Enrollment:
    """Enroll a student by join code, then try to seat them in random categories."""

    code = join_code.strip()
    course = repos.courses.get_course_by_join_code(code) if code else None
    if course is None or not course.is_active:
        raise InvalidJoinCode()

    if course.teacher_id == user_id:
        raise EnrollmentRuleViolation("The teacher of a course cannot enroll in it")

    existing = next(
        (e for e in repos.enrollments.get_enrollments_by_student(user_id) if e.course_id == course.id),
        None,
    )
    if existing is not None and existing.is_active:
        raise EnrollmentRuleViolation("You are already enrolled in this course", status_code=409)

    if existing is not None:
        enrollment = repos.enrollments.update_enrollment(
            existing.model_copy(update={"is_active": True, "enrolled_at": utc_now_iso()})
        )
        logger.info("reactivated enrollment %s of student %s", enrollment.id, user_id)
    else:
        enrollment = repos.enrollments.create_enrollment(
            Enrollment(id="", student_id=user_id, course_id=course.id, enrolled_at=utc_now_iso())
        )
        logger.info("student %s enrolled in course %s", user_id, course.id)

    try:
        assign_on_enrollment(repos, course_id=course.id, student_id=user_id)
    except Exception:
        logger.exception("auto-assignment failed for student %s in course %s", user_id, course.id)

    return enrollment
