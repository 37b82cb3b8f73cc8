"""Group persistence over the ``groups`` table."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..schemas import Group
from .base import TableRepository
from .records import record_id, timestamp, to_bool, to_str, without_empty_id


def group_from_record(raw: Mapping[str, Any]) -> Group:
    return Group(
        id=record_id(raw),
        name=to_str(raw.get("name")),
        category_id=to_str(raw.get("category_id")),
        course_id=to_str(raw.get("course_id")),
        teacher_id=to_str(raw.get("teacher_id")),
        created_at=timestamp(raw, "created_at", "createdAt"),
        is_active=to_bool(raw.get("is_active"), True),
    )


def group_to_record(group: Group) -> dict[str, Any]:
    return without_empty_id(
        {
            "_id": group.id,
            "name": group.name,
            "category_id": group.category_id,
            "course_id": group.course_id,
            "teacher_id": group.teacher_id,
            "created_at": group.created_at,
            "is_active": group.is_active,
        }
    )


class GroupRepository(TableRepository):
    table = "groups"

    def get_group_by_id(self, group_id: str) -> Optional[Group]:
        if not group_id:
            return None
        raw = self._read_first({"_id": group_id, "is_active": True})
        return group_from_record(raw) if raw else None

    def get_groups_by_course(self, course_id: str) -> list[Group]:
        rows = self._read({"course_id": course_id, "is_active": True})
        return [group_from_record(row) for row in rows]

    def get_groups_by_category(self, category_id: str) -> list[Group]:
        rows = self._read({"category_id": category_id, "is_active": True})
        return [group_from_record(row) for row in rows]

    def create_group(self, group: Group) -> Group:
        return group_from_record(self._insert_one(group_to_record(group)))

    def delete_group(self, group_id: str) -> bool:
        self._update(group_id, {"is_active": False})
        return True
