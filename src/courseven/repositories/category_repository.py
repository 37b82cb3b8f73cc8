"""Category persistence over the ``categories`` table."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..schemas import Category
from ..schemas.category import MANUAL
from .base import TableRepository
from .records import record_id, timestamp, to_bool, to_optional_int, to_optional_str, to_str, without_empty_id


def category_from_record(raw: Mapping[str, Any]) -> Category:
    return Category(
        id=record_id(raw),
        name=to_str(raw.get("name")),
        description=to_optional_str(raw.get("description")),
        course_id=to_str(raw.get("course_id")),
        teacher_id=to_str(raw.get("teacher_id")),
        grouping_method=to_str(raw.get("grouping_method"), MANUAL),
        max_members_per_group=to_optional_int(raw.get("max_members_per_group")),
        created_at=timestamp(raw, "created_at", "createdAt"),
        is_active=to_bool(raw.get("is_active"), True),
    )


def category_to_record(category: Category) -> dict[str, Any]:
    return without_empty_id(
        {
            "_id": category.id,
            "name": category.name,
            "description": category.description,
            "course_id": category.course_id,
            "teacher_id": category.teacher_id,
            "grouping_method": category.grouping_method,
            "max_members_per_group": category.max_members_per_group,
            "created_at": category.created_at,
            "is_active": category.is_active,
        }
    )


class CategoryRepository(TableRepository):
    table = "categories"

    def get_category_by_id(self, category_id: str) -> Optional[Category]:
        if not category_id:
            return None
        raw = self._read_first({"_id": category_id})
        return category_from_record(raw) if raw else None

    def get_categories_by_course(self, course_id: str) -> list[Category]:
        rows = self._read({"course_id": course_id, "is_active": True})
        return [category_from_record(row) for row in rows]

    def create_category(self, category: Category) -> Category:
        return category_from_record(self._insert_one(category_to_record(category)))

    def delete_category(self, category_id: str) -> bool:
        self._update(category_id, {"is_active": False})
        return True
