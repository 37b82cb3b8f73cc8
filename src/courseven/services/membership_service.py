"""Manual group membership: joining and leaving groups."""

from __future__ import annotations

import logging

from ..repositories import Repositories
from ..schemas import Membership
from ..utils.datetime import utc_now_iso

logger = logging.getLogger(__name__)


class MembershipRuleViolation(Exception):
    """Raised when a join or leave request is not allowed."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def join_group(repos: Repositories, *, user_id: str, group_id: str) -> Membership:
    """Join a group of a manual category.

    Checks run in a fixed order so the first broken rule is the one reported.
    """

    if repos.memberships.is_user_member_of_group(user_id, group_id):
        raise MembershipRuleViolation("You are already a member of this group", status_code=409)

    group = repos.groups.get_group_by_id(group_id)
    if group is None:
        raise MembershipRuleViolation("Group not found", status_code=404)

    category = repos.categories.get_category_by_id(group.category_id)
    if category is None:
        raise MembershipRuleViolation("Category not found", status_code=404)

    if not category.is_manual:
        raise MembershipRuleViolation("Groups in this category are assigned automatically")

    for membership in repos.memberships.get_memberships_by_user(user_id):
        other = repos.groups.get_group_by_id(membership.group_id)
        if other is not None and other.category_id == category.id:
            raise MembershipRuleViolation(
                f'You already belong to a group of category "{category.name}"', status_code=409
            )

    capacity = category.capacity
    if capacity is not None and repos.memberships.count_members(group.id) >= capacity:
        raise MembershipRuleViolation("This group has reached its maximum capacity", status_code=409)

    membership = repos.memberships.create_membership(
        Membership(id="", user_id=user_id, group_id=group.id, joined_at=utc_now_iso())
    )
    logger.info("student %s joined group %s", user_id, group.id)
    return membership


def leave_group(repos: Repositories, *, user_id: str, group_id: str) -> None:
    """Deactivate the student's membership in a group."""

    memberships = [m for m in repos.memberships.get_memberships_by_group(group_id) if m.user_id == user_id]
    if not memberships:
        raise MembershipRuleViolation("You are not a member of this group", status_code=404)

    for membership in memberships:
        repos.memberships.delete_membership(membership.id)
    logger.info("student %s left group %s", user_id, group_id)
