"""Membership persistence over the ``memberships`` table."""

from __future__ import annotations

from typing import Any, Mapping

from ..schemas import Membership
from .base import TableRepository
from .records import record_id, timestamp, to_bool, to_str, without_empty_id


def membership_from_record(raw: Mapping[str, Any]) -> Membership:
    return Membership(
        id=record_id(raw),
        user_id=to_str(raw.get("user_id")),
        group_id=to_str(raw.get("group_id")),
        joined_at=timestamp(raw, "joinet_at", "joined_at", "joinedAt"),
        is_active=to_bool(raw.get("is_active"), True),
    )


def membership_to_record(membership: Membership) -> dict[str, Any]:
    # the store names this column joinet_at
    return without_empty_id(
        {
            "_id": membership.id,
            "user_id": membership.user_id,
            "group_id": membership.group_id,
            "joinet_at": membership.joined_at,
            "is_active": membership.is_active,
        }
    )


class MembershipRepository(TableRepository):
    table = "memberships"

    def get_memberships_by_user(self, user_id: str) -> list[Membership]:
        rows = self._read({"user_id": user_id, "is_active": True})
        return [membership_from_record(row) for row in rows]

    def get_memberships_by_group(self, group_id: str) -> list[Membership]:
        rows = self._read({"group_id": group_id, "is_active": True})
        return [membership_from_record(row) for row in rows]

    def count_members(self, group_id: str) -> int:
        return len(self.get_memberships_by_group(group_id))

    def is_user_member_of_group(self, user_id: str, group_id: str) -> bool:
        rows = self._read({"user_id": user_id, "group_id": group_id, "is_active": True})
        return len(rows) > 0

    def create_membership(self, membership: Membership) -> Membership:
        return membership_from_record(self._insert_one(membership_to_record(membership)))

    def delete_membership(self, membership_id: str) -> bool:
        self._update(membership_id, {"is_active": False})
        return True
