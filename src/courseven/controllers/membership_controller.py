"""Student-side group membership state."""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..core.events import AppEventBus, MembershipJoinedEvent
from ..repositories import Repositories
from ..schemas import Membership
from ..services import membership_service
from .base import HANDLED_ERRORS, StateController


class MembershipState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    error: Optional[str] = None
    my_group_ids: tuple[str, ...] = ()
    group_member_counts: dict[str, int] = Field(default_factory=dict)


class MembershipController(StateController[MembershipState]):
    def __init__(
        self,
        repos: Repositories,
        event_bus: AppEventBus,
        get_current_user_id: Callable[[], Optional[str]],
    ) -> None:
        super().__init__(MembershipState())
        self._repos = repos
        self._event_bus = event_bus
        self._get_current_user_id = get_current_user_id

    def has_joined(self, group_id: str) -> bool:
        return group_id in self.snapshot.my_group_ids

    def preload_memberships(self, group_ids: Sequence[str]) -> None:
        """Record which of ``group_ids`` the current user belongs to."""

        user_id = self._get_current_user_id()
        if not group_ids or not user_id:
            return

        self._set_state(is_loading=True, error=None)
        try:
            joined = {m.group_id for m in self._repos.memberships.get_memberships_by_user(user_id)}
            self._set_state(my_group_ids=tuple(g for g in group_ids if g in joined))
        except HANDLED_ERRORS as exc:
            self._set_error(exc)
        finally:
            self._set_state(is_loading=False)

    def load_member_counts(self, group_ids: Sequence[str]) -> None:
        if not group_ids:
            return

        self._set_state(is_loading=True, error=None)
        try:
            counts = {group_id: self._repos.memberships.count_members(group_id) for group_id in group_ids}
            self._set_state(group_member_counts={**self.snapshot.group_member_counts, **counts})
        except HANDLED_ERRORS as exc:
            self._set_error(exc)
        finally:
            self._set_state(is_loading=False)

    def join_group(self, group_id: str) -> Optional[Membership]:
        user_id = self._get_current_user_id()
        if not user_id:
            self._set_error("User is not authenticated")
            return None

        self._set_state(is_loading=True, error=None)
        try:
            membership = membership_service.join_group(self._repos, user_id=user_id, group_id=group_id)
            count = self._repos.memberships.count_members(group_id)
            self._set_state(
                my_group_ids=(*self.snapshot.my_group_ids, group_id),
                group_member_counts={**self.snapshot.group_member_counts, group_id: count},
            )
            group = self._repos.groups.get_group_by_id(group_id)
            if group is not None:
                self._event_bus.publish(MembershipJoinedEvent(group_id=group_id, course_id=group.course_id))
            return membership
        except HANDLED_ERRORS as exc:
            self._set_error(exc)
            return None
        finally:
            self._set_state(is_loading=False)
