"""Automatic placement of students into groups of random categories."""

from __future__ import annotations

import logging
from typing import Optional

from ..repositories import Repositories
from ..schemas import Category, Group, Membership
from ..utils.datetime import utc_now_iso

logger = logging.getLogger(__name__)


def _has_capacity(repos: Repositories, group: Group, capacity: Optional[int]) -> bool:
    if capacity is None:
        return True
    return repos.memberships.count_members(group.id) < capacity


def _assigned_category_ids(repos: Repositories, student_id: str) -> set[str]:
    category_ids: set[str] = set()
    for membership in repos.memberships.get_memberships_by_user(student_id):
        group = repos.groups.get_group_by_id(membership.group_id)
        if group is not None:
            category_ids.add(group.category_id)
    return category_ids


def _placed_student_ids(repos: Repositories, course_id: str) -> set[str]:
    """Students seated in an active group of the course; soft-deleted groups free their members."""

    placed: set[str] = set()
    for group in repos.groups.get_groups_by_course(course_id):
        for membership in repos.memberships.get_memberships_by_group(group.id):
            placed.add(membership.user_id)
    return placed


def _add_member(repos: Repositories, *, user_id: str, group_id: str) -> Membership:
    return repos.memberships.create_membership(
        Membership(id="", user_id=user_id, group_id=group_id, joined_at=utc_now_iso())
    )


def assign_on_enrollment(repos: Repositories, *, course_id: str, student_id: str) -> list[Membership]:
    """Seat a newly enrolled student in the first open group of each random category."""

    categories = [c for c in repos.categories.get_categories_by_course(course_id) if c.is_random]
    if not categories:
        return []

    assigned = _assigned_category_ids(repos, student_id)
    created: list[Membership] = []

    for category in categories:
        if category.id in assigned:
            continue

        target = None
        for group in repos.groups.get_groups_by_category(category.id):
            if _has_capacity(repos, group, category.capacity):
                target = group
                break
        if target is None:
            logger.info("no group with capacity in category %s for student %s", category.id, student_id)
            continue

        created.append(_add_member(repos, user_id=student_id, group_id=target.id))
        assigned.add(category.id)
        logger.info("auto-assigned student %s to group %s", student_id, target.id)

    return created


def backfill_on_group_creation(repos: Repositories, *, group: Group, category: Category) -> list[Membership]:
    """Fill a new group of a random category with enrolled students not placed anywhere yet."""

    capacity = category.capacity
    remaining: Optional[int] = None
    if capacity is not None:
        remaining = capacity - repos.memberships.count_members(group.id)
        if remaining <= 0:
            return []

    placed = _placed_student_ids(repos, group.course_id)
    enrollments = repos.enrollments.get_enrollments_by_course(group.course_id)
    if not enrollments:
        return []

    created: list[Membership] = []
    for enrollment in enrollments:
        if remaining is not None and remaining <= 0:
            break
        student_id = enrollment.student_id
        if not student_id or student_id in placed:
            continue

        created.append(_add_member(repos, user_id=student_id, group_id=group.id))
        placed.add(student_id)
        if remaining is not None:
            remaining -= 1

    if created:
        logger.info("backfilled %s students into group %s", len(created), group.id)
    return created
