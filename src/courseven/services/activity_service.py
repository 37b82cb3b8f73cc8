"""Activity management and the peer-review window of each activity."""

from __future__ import annotations

import logging
from typing import Optional

from ..repositories import Repositories
from ..schemas import CourseActivity
from ..utils.datetime import utc_now_iso

logger = logging.getLogger(__name__)


class ActivityRuleViolation(Exception):
    """Raised when an activity request is invalid."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.strip() or None


def _owned_activity(repos: Repositories, *, teacher_id: str, activity_id: str) -> CourseActivity:
    activity = repos.activities.get_activity_by_id(activity_id)
    if activity is None:
        raise ActivityRuleViolation("Activity not found", status_code=404)
    if activity.created_by != teacher_id:
        raise ActivityRuleViolation("You do not have permission to change this activity", status_code=403)
    return activity


def create_activity(
    repos: Repositories,
    *,
    teacher_id: str,
    category_id: str,
    title: str,
    description: Optional[str] = None,
    due_date: Optional[str] = None,
    reviewing: bool = False,
    private_review: bool = False,
) -> CourseActivity:
    """Create an activity in a category; its course is taken from the category."""

    title = title.strip()
    if not title:
        raise ActivityRuleViolation("Activity title is required")

    category = repos.categories.get_category_by_id(category_id)
    if category is None or not category.is_active:
        raise ActivityRuleViolation("Category not found", status_code=404)
    if category.teacher_id != teacher_id:
        raise ActivityRuleViolation("You do not have permission to change this category", status_code=403)

    activity = repos.activities.create_activity(
        CourseActivity(
            id="",
            title=title,
            description=_clean_description(description),
            category_id=category.id,
            course_id=category.course_id,
            created_by=teacher_id,
            due_date=due_date or None,
            created_at=utc_now_iso(),
            reviewing=reviewing,
            private_review=private_review,
        )
    )
    logger.info("activity %s created in category %s", activity.id, category.id)
    return activity


def update_activity(
    repos: Repositories,
    *,
    teacher_id: str,
    activity_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    due_date: Optional[str] = None,
) -> CourseActivity:
    """Change the title, description or due date; ``None`` keeps the current value."""

    activity = _owned_activity(repos, teacher_id=teacher_id, activity_id=activity_id)

    changes: dict[str, object] = {}
    if title is not None:
        title = title.strip()
        if not title:
            raise ActivityRuleViolation("Activity title is required")
        changes["title"] = title
    if description is not None:
        changes["description"] = _clean_description(description)
    if due_date is not None:
        changes["due_date"] = due_date or None
    if not changes:
        return activity

    updated = repos.activities.update_activity(activity.model_copy(update=changes))
    logger.info("activity %s updated (%s)", updated.id, ", ".join(sorted(changes)))
    return updated


def set_reviewing(
    repos: Repositories,
    *,
    teacher_id: str,
    activity_id: str,
    reviewing: bool,
    private_review: Optional[bool] = None,
) -> CourseActivity:
    """Open or close the peer-review window, optionally switching private review."""

    activity = _owned_activity(repos, teacher_id=teacher_id, activity_id=activity_id)

    changes: dict[str, object] = {"reviewing": reviewing}
    if private_review is not None:
        changes["private_review"] = private_review

    updated = repos.activities.update_activity(activity.model_copy(update=changes))
    logger.info("peer review %s for activity %s", "opened" if reviewing else "closed", updated.id)
    return updated


def list_course_activities(repos: Repositories, *, course_id: str) -> list[CourseActivity]:
    return repos.activities.get_activities_by_course(course_id)


def delete_activity(repos: Repositories, *, teacher_id: str, activity_id: str) -> None:
    activity = _owned_activity(repos, teacher_id=teacher_id, activity_id=activity_id)
    repos.activities.delete_activity(activity.id)
    logger.info("activity %s deactivated", activity.id)
