"""Enrollment persistence over the ``enrollments`` table."""

from __future__ import annotations

from typing import Any, Mapping

from ..core.exceptions import TableGatewayError
from ..schemas import Enrollment
from .base import TableRepository
from .records import first_str, record_id, timestamp, to_bool, to_str, without_empty_id


def enrollment_from_record(raw: Mapping[str, Any]) -> Enrollment:
    return Enrollment(
        id=record_id(raw),
        student_id=first_str(raw, "user_id", "student_id") or "",
        course_id=to_str(raw.get("course_id")),
        enrolled_at=timestamp(raw, "enrolled_at", "enrolledAt"),
        is_active=to_bool(raw.get("is_active"), True),
    )


def enrollment_to_record(enrollment: Enrollment) -> dict[str, Any]:
    return without_empty_id(
        {
            "_id": enrollment.id,
            "user_id": enrollment.student_id,
            "course_id": enrollment.course_id,
            "enrolled_at": enrollment.enrolled_at,
            "is_active": enrollment.is_active,
        }
    )


class EnrollmentRepository(TableRepository):
    table = "enrollments"

    def get_enrollments_by_student(self, student_id: str) -> list[Enrollment]:
        """All enrollments of a student, active or withdrawn."""

        return [enrollment_from_record(row) for row in self._read({"user_id": student_id})]

    def get_enrollments_by_course(self, course_id: str) -> list[Enrollment]:
        """Active enrollments of a course in the order the store returns them."""

        enrollments = [enrollment_from_record(row) for row in self._read({"course_id": course_id})]
        return [enrollment for enrollment in enrollments if enrollment.is_active]

    def create_enrollment(self, enrollment: Enrollment) -> Enrollment:
        record = enrollment_to_record(enrollment)
        record.setdefault("status", "active")
        return enrollment_from_record(self._insert_one(record))

    def update_enrollment(self, enrollment: Enrollment) -> Enrollment:
        if not enrollment.id:
            raise ValueError("update_enrollment requires an enrollment id")
        record = enrollment_to_record(enrollment)
        record.pop("_id", None)
        updated = self._update(enrollment.id, record)
        if updated is None:
            raise TableGatewayError(self.table, detail=f"Enrollment {enrollment.id} not found after update")
        return enrollment_from_record(updated)
