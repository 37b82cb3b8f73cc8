"""Endpoints for submitting peer reviews and reading their summaries."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...repositories import Repositories
from ...schemas import (
    ActivityPeerReviewSummary,
    Assessment,
    AssessmentCreate,
    CoursePeerReviewSummary,
    StudentPeerReviewResults,
)
from ...services import assessment_service, peer_review_service
from ...services.assessment_service import AssessmentRuleViolation
from ..dependencies import get_repositories

router = APIRouter(tags=["peer-review"])


@router.post(
    "/assessments",
    response_model=Assessment,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a peer review",
    responses={
        400: {"description": "Self review or score outside 2-5"},
        409: {"description": "Reviewer already assessed this student for the activity"},
    },
)
def submit_assessment(
    payload: AssessmentCreate,
    repos: Repositories = Depends(get_repositories),
) -> Assessment:
    """Store one reviewer's four criterion scores for a peer.

    Example request body::

        {
            "activity_id": "a1b2c3d4e5f60718293a4b5c6d7e8f90",
            "group_id": "0c5d1e2f3a4b5c6d7e8f9a0b1c2d3e4f",
            "reviewer_id": "student-7",
            "student_id": "student-9",
            "punctuality_score": 4,
            "contributions_score": 5,
            "commitment_score": 3,
            "attitude_score": 4
        }
    """

    try:
        return assessment_service.submit_assessment(repos, payload=payload)
    except AssessmentRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get(
    "/activities/{activity_id}/peer-review",
    response_model=ActivityPeerReviewSummary,
    summary="Peer-review summary of one activity",
)
def activity_peer_review(
    activity_id: str,
    repos: Repositories = Depends(get_repositories),
) -> ActivityPeerReviewSummary:
    return peer_review_service.compute_activity_summary(repos, activity_id=activity_id)


@router.get(
    "/activities/{activity_id}/groups/{group_id}/pending-reviews",
    response_model=list[str],
    summary="Peers a reviewer still has to assess",
)
def pending_reviews(
    activity_id: str,
    group_id: str,
    reviewer_id: str = Query(..., min_length=1),
    repos: Repositories = Depends(get_repositories),
) -> list[str]:
    members = [m.user_id for m in repos.memberships.get_memberships_by_group(group_id)]
    return peer_review_service.list_pending_peer_ids(
        repos,
        activity_id=activity_id,
        group_id=group_id,
        reviewer_id=reviewer_id,
        group_member_ids=members,
    )


@router.get(
    "/courses/{course_id}/peer-review",
    response_model=CoursePeerReviewSummary,
    summary="Peer-review summary across a course's activities",
)
def course_peer_review(
    course_id: str,
    tolerate_partial_failures: bool = Query(False),
    repos: Repositories = Depends(get_repositories),
) -> CoursePeerReviewSummary:
    """Aggregate every activity of the course by reviewed student and by group."""

    activities = repos.activities.get_activities_by_course(course_id)
    return peer_review_service.compute_course_summary(
        repos,
        activity_ids=[activity.id for activity in activities],
        tolerate_partial_failures=tolerate_partial_failures,
    )


@router.get(
    "/activities/{activity_id}/students/{student_id}/results",
    response_model=StudentPeerReviewResults,
    summary="Reviews a student received in one activity",
)
def student_activity_results(
    activity_id: str,
    student_id: str,
    repos: Repositories = Depends(get_repositories),
) -> StudentPeerReviewResults:
    return peer_review_service.compute_student_results(repos, student_id=student_id, activity_ids=[activity_id])


@router.get(
    "/courses/{course_id}/students/{student_id}/peer-review",
    response_model=StudentPeerReviewResults,
    summary="Reviews a student received across a course",
)
def student_course_results(
    course_id: str,
    student_id: str,
    repos: Repositories = Depends(get_repositories),
) -> StudentPeerReviewResults:
    """Only activities with public results count; private reviews stay with the teacher."""

    activities = repos.activities.get_activities_by_course(course_id)
    return peer_review_service.compute_student_results(
        repos,
        student_id=student_id,
        activity_ids=peer_review_service.visible_activity_ids(activities),
    )
