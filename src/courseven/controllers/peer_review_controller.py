"""Peer-review summaries and submissions with throttled reloads."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.events import ActivityChangedEvent, AppEvent, AppEventBus, MembershipJoinedEvent
from ..core.refresh import RefreshManager
from ..repositories import Repositories
from ..schemas import (
    ActivityPeerReviewSummary,
    Assessment,
    AssessmentCreate,
    CoursePeerReviewSummary,
)
from ..services import assessment_service, peer_review_service
from .base import HANDLED_ERRORS, StateController

ACTIVITY_KEY_PREFIX = "peer-review:activity:"
COURSE_KEY_PREFIX = "peer-review:course:"


class PeerReviewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_loading: bool = False
    error: Optional[str] = None
    activity_summaries: dict[str, ActivityPeerReviewSummary] = Field(default_factory=dict)
    course_summaries: dict[str, CoursePeerReviewSummary] = Field(default_factory=dict)


class PeerReviewController(StateController[PeerReviewState]):
    def __init__(
        self,
        repos: Repositories,
        event_bus: AppEventBus,
        refresh: RefreshManager,
        *,
        ttl_seconds: float = 30.0,
        tolerate_partial_failures: bool = False,
    ) -> None:
        super().__init__(PeerReviewState())
        self._repos = repos
        self._event_bus = event_bus
        self._refresh = refresh
        self._ttl_seconds = ttl_seconds
        self._tolerate_partial_failures = tolerate_partial_failures
        self._unsubscribe = event_bus.subscribe(self._on_event)

    def dispose(self) -> None:
        self._unsubscribe()

    def load_activity_summary(self, activity_id: str, *, force: bool = False) -> None:
        def action() -> None:
            summary = peer_review_service.compute_activity_summary(self._repos, activity_id=activity_id)
            self._set_state(activity_summaries={**self.snapshot.activity_summaries, activity_id: summary})

        self._load(f"{ACTIVITY_KEY_PREFIX}{activity_id}", action, force)

    def load_course_summary(self, course_id: str, *, force: bool = False) -> None:
        def action() -> None:
            activities = self._repos.activities.get_activities_by_course(course_id)
            summary = peer_review_service.compute_course_summary(
                self._repos,
                activity_ids=[activity.id for activity in activities],
                tolerate_partial_failures=self._tolerate_partial_failures,
            )
            self._set_state(course_summaries={**self.snapshot.course_summaries, course_id: summary})

        self._load(f"{COURSE_KEY_PREFIX}{course_id}", action, force)

    def submit_assessment(self, payload: AssessmentCreate) -> Optional[Assessment]:
        self._set_state(is_loading=True, error=None)
        try:
            assessment = assessment_service.submit_assessment(self._repos, payload=payload)
            activity = self._repos.activities.get_activity_by_id(payload.activity_id)
        except HANDLED_ERRORS as exc:
            self._set_error(exc)
            return None
        finally:
            self._set_state(is_loading=False)

        self._refresh.invalidate(f"{ACTIVITY_KEY_PREFIX}{payload.activity_id}")
        if activity is not None:
            self._event_bus.publish(ActivityChangedEvent(course_id=activity.course_id))
        return assessment

    def _load(self, key: str, action, force: bool) -> None:
        self._set_state(is_loading=True, error=None)
        try:
            self._refresh.run(key, self._ttl_seconds, action, force=force)
        except HANDLED_ERRORS as exc:
            self._set_error(exc)
        finally:
            self._set_state(is_loading=False)

    def _on_event(self, event: AppEvent) -> None:
        if isinstance(event, (ActivityChangedEvent, MembershipJoinedEvent)):
            self._refresh.invalidate(f"{COURSE_KEY_PREFIX}{event.course_id}")
        if isinstance(event, ActivityChangedEvent):
            self._refresh.invalidate_prefix(ACTIVITY_KEY_PREFIX)
