"""Course activity persistence over the ``activities`` table."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import TableGatewayError
from ..schemas import CourseActivity
from .base import TableRepository
from .records import record_id, timestamp, to_bool, to_optional_str, to_str, without_empty_id


def activity_from_record(raw: Mapping[str, Any]) -> CourseActivity:
    return CourseActivity(
        id=record_id(raw),
        title=to_str(raw.get("title")),
        description=to_optional_str(raw.get("description")),
        category_id=to_str(raw.get("category_id")),
        course_id=to_str(raw.get("course_id")),
        created_by=to_str(raw.get("created_by")),
        due_date=to_optional_str(raw.get("due_date")),
        created_at=timestamp(raw, "created_at", "createdAt"),
        is_active=to_bool(raw.get("is_active"), True),
        reviewing=to_bool(raw.get("reviewing"), False),
        private_review=to_bool(raw.get("private_review"), False),
    )


def activity_to_record(activity: CourseActivity) -> dict[str, Any]:
    return without_empty_id(
        {
            "_id": activity.id,
            "title": activity.title,
            "description": activity.description,
            "category_id": activity.category_id,
            "course_id": activity.course_id,
            "created_by": activity.created_by,
            "due_date": activity.due_date,
            "created_at": activity.created_at,
            "is_active": activity.is_active,
            "reviewing": activity.reviewing,
            "private_review": activity.private_review,
        }
    )


class ActivityRepository(TableRepository):
    table = "activities"

    def get_activity_by_id(self, activity_id: str) -> Optional[CourseActivity]:
        if not activity_id:
            return None
        raw = self._read_first({"_id": activity_id, "is_active": True})
        return activity_from_record(raw) if raw else None

    def get_activities_by_course(self, course_id: str) -> list[CourseActivity]:
        rows = self._read({"course_id": course_id, "is_active": True})
        return [activity_from_record(row) for row in rows]

    def create_activity(self, activity: CourseActivity) -> CourseActivity:
        return activity_from_record(self._insert_one(activity_to_record(activity)))

    def update_activity(self, activity: CourseActivity) -> CourseActivity:
        if not activity.id:
            raise ValueError("update_activity requires an activity id")
        record = activity_to_record(activity)
        record.pop("_id", None)
        record.pop("created_at", None)
        updated = self._update(activity.id, record)
        if updated is None:
            raise TableGatewayError(self.table, detail=f"Activity {activity.id} not found after update")
        return activity_from_record(updated)

    def delete_activity(self, activity_id: str) -> bool:
        self._update(activity_id, {"is_active": False})
        return True
