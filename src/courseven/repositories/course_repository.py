"""Course persistence over the ``courses`` table."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import TableGatewayError
from ..schemas import Course
from .base import TableRepository
from .records import record_id, timestamp, to_bool, to_str, without_empty_id


def course_from_record(raw: Mapping[str, Any]) -> Course:
    return Course(
        id=record_id(raw),
        name=to_str(raw.get("name")),
        description=to_str(raw.get("description")),
        join_code=to_str(raw.get("join_code")),
        teacher_id=to_str(raw.get("teacher_id")),
        created_at=timestamp(raw, "created_at", "createdAt"),
        is_active=to_bool(raw.get("is_active"), True),
    )


def course_to_record(course: Course) -> dict[str, Any]:
    return without_empty_id(
        {
            "_id": course.id,
            "name": course.name,
            "description": course.description,
            "join_code": course.join_code,
            "teacher_id": course.teacher_id,
            "created_at": course.created_at,
            "is_active": course.is_active,
        }
    )


class CourseRepository(TableRepository):
    table = "courses"

    def get_course_by_id(self, course_id: str) -> Optional[Course]:
        if not course_id:
            return None
        raw = self._read_first({"_id": course_id})
        return course_from_record(raw) if raw else None

    def get_courses_by_teacher(self, teacher_id: str) -> list[Course]:
        return [course_from_record(row) for row in self._read({"teacher_id": teacher_id})]

    def get_course_by_join_code(self, join_code: str) -> Optional[Course]:
        """Resolve a join code to its active course, if any."""

        for row in self._read({"join_code": join_code}):
            course = course_from_record(row)
            if course.is_active:
                return course
        return None

    def create_course(self, course: Course) -> Course:
        return course_from_record(self._insert_one(course_to_record(course)))

    def set_course_active(self, course_id: str, active: bool) -> Course:
        updated = self._update(course_id, {"is_active": active})
        if updated is None:
            raise TableGatewayError(self.table, detail=f"Course {course_id} not found after update")
        return course_from_record(updated)
