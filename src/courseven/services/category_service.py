"""Category management for a teacher's courses."""

from __future__ import annotations

import logging
from typing import Optional

from ..repositories import Repositories
from ..schemas import Category
from ..schemas.category import MANUAL, RANDOM, capacity_of
from ..utils.datetime import utc_now_iso

logger = logging.getLogger(__name__)


class CategoryRuleViolation(Exception):
    """Raised when a category request is invalid."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def create_category(
    repos: Repositories,
    *,
    teacher_id: str,
    course_id: str,
    name: str,
    description: Optional[str] = None,
    grouping_method: str = MANUAL,
    max_members_per_group: Optional[int] = None,
) -> Category:
    name = name.strip()
    if not name:
        raise CategoryRuleViolation("Category name is required")

    method = grouping_method.strip().lower()
    if method not in (MANUAL, RANDOM):
        raise CategoryRuleViolation(f"Unknown grouping method {grouping_method!r}")

    course = repos.courses.get_course_by_id(course_id)
    if course is None:
        raise CategoryRuleViolation("Course not found", status_code=404)
    if course.teacher_id != teacher_id:
        raise CategoryRuleViolation("You do not have permission to change this course", status_code=403)

    description = description.strip() if description else None
    category = repos.categories.create_category(
        Category(
            id="",
            name=name,
            description=description or None,
            course_id=course.id,
            teacher_id=teacher_id,
            grouping_method=method,
            max_members_per_group=capacity_of(max_members_per_group),
            created_at=utc_now_iso(),
        )
    )
    logger.info("category %s (%s) created in course %s", category.id, method, course.id)
    return category


def list_course_categories(repos: Repositories, *, course_id: str) -> list[Category]:
    return repos.categories.get_categories_by_course(course_id)


def delete_category(repos: Repositories, *, teacher_id: str, category_id: str) -> None:
    category = repos.categories.get_category_by_id(category_id)
    if category is None or not category.is_active:
        raise CategoryRuleViolation("Category not found", status_code=404)
    if category.teacher_id != teacher_id:
        raise CategoryRuleViolation("You do not have permission to change this category", status_code=403)

    repos.categories.delete_category(category.id)
    logger.info("category %s deactivated", category.id)
