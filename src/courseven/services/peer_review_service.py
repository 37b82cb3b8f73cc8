"""Peer-review aggregation: per-activity and cross-activity score rollups."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from ..core.exceptions import TableGatewayError
from ..repositories import Repositories
from ..schemas import (
    ActivityPeerReviewSummary,
    Assessment,
    CourseActivity,
    CoursePeerReviewSummary,
    GroupActivityReviewStats,
    GroupCrossActivityStats,
    ScoreAverages,
    StudentActivityReviewStats,
    StudentCrossActivityStats,
    StudentPeerReviewResults,
)
from ..utils.rounding import round_half_up

logger = logging.getLogger(__name__)


def _bucket(assessments: Iterable[Assessment], key: Callable[[Assessment], str]) -> dict[str, list[Assessment]]:
    buckets: dict[str, list[Assessment]] = {}
    for assessment in assessments:
        buckets.setdefault(key(assessment), []).append(assessment)
    return buckets


def _group_key(assessment: Assessment) -> str:
    return assessment.group_id or ""


def _student_key(assessment: Assessment) -> str:
    return assessment.student_id


def compute_averages(assessments: Sequence[Assessment]) -> ScoreAverages:
    """Mean of each criterion and of the per-record overall, rounded to 2 decimals."""

    if not assessments:
        return ScoreAverages()

    count = len(assessments)
    punctuality = sum(a.punctuality_score for a in assessments)
    contributions = sum(a.contributions_score for a in assessments)
    commitment = sum(a.commitment_score for a in assessments)
    attitude = sum(a.attitude_score for a in assessments)
    # the stored overall is already rounded, so recompute it per record
    overall = sum(a.record_overall for a in assessments)

    return ScoreAverages(
        punctuality=round_half_up(punctuality / count),
        contributions=round_half_up(contributions / count),
        commitment=round_half_up(commitment / count),
        attitude=round_half_up(attitude / count),
        overall=round_half_up(overall / count),
    )


def summarize_activity(activity_id: str, assessments: Sequence[Assessment]) -> ActivityPeerReviewSummary:
    groups = []
    for group_id, group_assessments in _bucket(assessments, _group_key).items():
        students = [
            StudentActivityReviewStats(
                student_id=student_id,
                received_count=len(received),
                averages=compute_averages(received),
            )
            for student_id, received in _bucket(group_assessments, _student_key).items()
        ]
        groups.append(
            GroupActivityReviewStats(
                group_id=group_id,
                averages=compute_averages(group_assessments),
                students=students,
            )
        )

    return ActivityPeerReviewSummary(
        activity_id=activity_id,
        activity_averages=compute_averages(assessments),
        groups=groups,
    )


def summarize_course(assessments: Sequence[Assessment]) -> CoursePeerReviewSummary:
    students = [
        StudentCrossActivityStats(
            student_id=student_id,
            assessments_received=len(received),
            averages=compute_averages(received),
        )
        for student_id, received in _bucket(assessments, _student_key).items()
    ]
    groups = [
        GroupCrossActivityStats(
            group_id=group_id,
            assessments_count=len(group_assessments),
            averages=compute_averages(group_assessments),
        )
        for group_id, group_assessments in _bucket(assessments, _group_key).items()
    ]
    return CoursePeerReviewSummary(students=students, groups=groups)


def compute_activity_summary(repos: Repositories, *, activity_id: str) -> ActivityPeerReviewSummary:
    """Load every review of one activity and roll it up by group and student."""

    assessments = repos.assessments.get_assessments_by_activity(activity_id)
    return summarize_activity(activity_id, assessments)


def compute_course_summary(
    repos: Repositories,
    *,
    activity_ids: Sequence[str],
    tolerate_partial_failures: bool = False,
) -> CoursePeerReviewSummary:
    """Roll up the reviews of several activities by student and by group.

    Activities are fetched one after another. By default the first store
    error aborts the whole summary; with ``tolerate_partial_failures`` the
    failing activity is skipped.
    """

    if not activity_ids:
        return CoursePeerReviewSummary()

    collected: list[Assessment] = []
    for activity_id in activity_ids:
        try:
            collected.extend(repos.assessments.get_assessments_by_activity(activity_id))
        except TableGatewayError as exc:
            if not tolerate_partial_failures:
                raise
            logger.warning("skipping activity %s in course summary: %s", activity_id, exc)

    return summarize_course(collected)


def list_pending_peer_ids(
    repos: Repositories,
    *,
    activity_id: str,
    group_id: str,
    reviewer_id: str,
    group_member_ids: Sequence[str],
) -> list[str]:
    """Group members the reviewer still has to assess, in the given order."""

    reviewed = {
        assessment.student_id
        for assessment in repos.assessments.get_assessments_by_reviewer(activity_id, reviewer_id)
        if not assessment.group_id or assessment.group_id == group_id
    }
    return [
        member_id
        for member_id in group_member_ids
        if member_id and member_id != reviewer_id and member_id not in reviewed
    ]


def visible_activity_ids(activities: Iterable[CourseActivity]) -> list[str]:
    """Activities whose results students may see; private reviews stay with the teacher."""

    return [activity.id for activity in activities if not activity.private_review]


def compute_student_results(
    repos: Repositories,
    *,
    student_id: str,
    activity_ids: Sequence[str],
) -> StudentPeerReviewResults:
    """Reviews a student received across ``activity_ids``, newest first."""

    if not activity_ids:
        return StudentPeerReviewResults(student_id=student_id)

    received = repos.assessments.get_assessments_for_student_across_activities(activity_ids, student_id)
    received.sort(key=lambda assessment: assessment.created_at, reverse=True)
    return StudentPeerReviewResults(
        student_id=student_id,
        activity_ids=list(activity_ids),
        assessments_received=len(received),
        averages=compute_averages(received),
        received=received,
    )
