"""Group management; groups of random categories are backfilled on creation."""

from __future__ import annotations

import logging

from ..repositories import Repositories
from ..schemas import Group, Membership
from ..utils.datetime import utc_now_iso
from .assignment_service import backfill_on_group_creation

logger = logging.getLogger(__name__)


class GroupRuleViolation(Exception):
    """Raised when a group request is invalid."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def create_group(
    repos: Repositories,
    *,
    teacher_id: str,
    name: str,
    category_id: str,
) -> tuple[Group, list[Membership]]:
    """Create a group and return it with any memberships the backfill created."""

    name = name.strip()
    if not name:
        raise GroupRuleViolation("Group name is required")

    category = repos.categories.get_category_by_id(category_id)
    if category is None or not category.is_active:
        raise GroupRuleViolation("Category not found", status_code=404)
    if category.teacher_id != teacher_id:
        raise GroupRuleViolation("You do not have permission to change this category", status_code=403)

    group = repos.groups.create_group(
        Group(
            id="",
            name=name,
            category_id=category.id,
            course_id=category.course_id,
            teacher_id=teacher_id,
            created_at=utc_now_iso(),
        )
    )
    logger.info("group %s created in category %s", group.id, category.id)

    assigned: list[Membership] = []
    if category.is_random:
        try:
            assigned = backfill_on_group_creation(repos, group=group, category=category)
        except Exception:
            logger.exception("backfill failed for group %s", group.id)

    return group, assigned


def list_category_groups(repos: Repositories, *, category_id: str) -> list[Group]:
    return repos.groups.get_groups_by_category(category_id)


def delete_group(repos: Repositories, *, teacher_id: str, group_id: str) -> None:
    group = repos.groups.get_group_by_id(group_id)
    if group is None:
        raise GroupRuleViolation("Group not found", status_code=404)
    if group.teacher_id != teacher_id:
        raise GroupRuleViolation("You do not have permission to change this group", status_code=403)

    repos.groups.delete_group(group.id)
    logger.info("group %s deactivated", group.id)
