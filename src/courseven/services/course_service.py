"""Course lifecycle owned by teachers."""

from __future__ import annotations

import logging
import string
from datetime import datetime, timedelta
from typing import Optional

from ..repositories import Repositories
from ..schemas import Course
from ..utils.datetime import epoch_millis, utc_now, utc_now_iso

logger = logging.getLogger(__name__)

JOIN_CODE_LENGTH = 6
JOIN_CODE_ATTEMPTS = 5
_BASE36_DIGITS = string.digits + string.ascii_uppercase


class CourseRuleViolation(Exception):
    """Raised when a course operation breaks an ownership or limit rule."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def generate_join_code(now: Optional[datetime] = None) -> str:
    """Last six base36 digits of the current epoch milliseconds."""

    return to_base36(epoch_millis(now))[-JOIN_CODE_LENGTH:].rjust(JOIN_CODE_LENGTH, "0")


def _unused_join_code(repos: Repositories) -> str:
    now = utc_now()
    for attempt in range(JOIN_CODE_ATTEMPTS):
        code = generate_join_code(now + timedelta(milliseconds=attempt))
        if repos.courses.get_course_by_join_code(code) is None:
            return code
    raise CourseRuleViolation("Could not generate a unique join code, try again", status_code=409)


def _owned_course(repos: Repositories, *, teacher_id: str, course_id: str) -> Course:
    course = repos.courses.get_course_by_id(course_id)
    if course is None:
        raise CourseRuleViolation("Course not found", status_code=404)
    if course.teacher_id != teacher_id:
        raise CourseRuleViolation("You do not have permission to change this course", status_code=403)
    return course


def _active_course_count(repos: Repositories, teacher_id: str, *, exclude_id: str = "") -> int:
    return sum(
        1
        for course in repos.courses.get_courses_by_teacher(teacher_id)
        if course.is_active and course.id != exclude_id
    )


def list_teacher_courses(repos: Repositories, *, teacher_id: str) -> list[Course]:
    return repos.courses.get_courses_by_teacher(teacher_id)


def create_course(
    repos: Repositories,
    *,
    teacher_id: str,
    name: str,
    description: str = "",
    max_courses: int = 3,
) -> Course:
    """Create an active course with a fresh join code."""

    name = name.strip()
    if not name:
        raise CourseRuleViolation("Course name is required")

    if _active_course_count(repos, teacher_id) >= max_courses:
        raise CourseRuleViolation(f"A teacher can have at most {max_courses} active courses")

    course = repos.courses.create_course(
        Course(
            id="",
            name=name,
            description=description.strip(),
            join_code=_unused_join_code(repos),
            teacher_id=teacher_id,
            created_at=utc_now_iso(),
            is_active=True,
        )
    )
    logger.info("course %s created by teacher %s with join code %s", course.id, teacher_id, course.join_code)
    return course


def set_course_active(
    repos: Repositories,
    *,
    teacher_id: str,
    course_id: str,
    active: bool,
    max_courses: int = 3,
) -> Course:
    course = _owned_course(repos, teacher_id=teacher_id, course_id=course_id)
    if course.is_active == active:
        return course

    if active and _active_course_count(repos, teacher_id, exclude_id=course.id) >= max_courses:
        raise CourseRuleViolation(f"A teacher can have at most {max_courses} active courses")

    updated = repos.courses.set_course_active(course.id, active)
    logger.info("course %s active=%s", course.id, active)
    return updated


def delete_course(repos: Repositories, *, teacher_id: str, course_id: str) -> Course:
    """Soft delete: the course is deactivated and its join code stops working."""

    course = _owned_course(repos, teacher_id=teacher_id, course_id=course_id)
    if not course.is_active:
        return course
    return repos.courses.set_course_active(course.id, False)
