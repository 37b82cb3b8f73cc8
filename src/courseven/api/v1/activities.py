"""Endpoints for course activities and their peer-review window."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...repositories import Repositories
from ...schemas import ActivityCreate, ActivityReviewUpdate, ActivityUpdate, CourseActivity
from ...services import activity_service
from ...services.activity_service import ActivityRuleViolation
from ..dependencies import get_repositories

router = APIRouter(prefix="/activities", tags=["activities"])


@router.post(
    "",
    response_model=CourseActivity,
    status_code=status.HTTP_201_CREATED,
    summary="Create an activity",
    responses={
        400: {"description": "Business rule violation"},
        403: {"description": "Category owned by another teacher"},
        404: {"description": "Category not found"},
    },
)
def create_activity(
    payload: ActivityCreate,
    repos: Repositories = Depends(get_repositories),
) -> CourseActivity:
    """Create an activity whose group members will review each other.

    Example request body::

        {
            "teacher_id": "teacher-1",
            "category_id": "9f8e7d6c5b4a39281706f5e4d3c2b1a0",
            "title": "Sprint 1 retrospective",
            "due_date": "2025-03-14T23:59:00+00:00",
            "reviewing": true,
            "private_review": false
        }
    """

    try:
        return activity_service.create_activity(
            repos,
            teacher_id=payload.teacher_id,
            category_id=payload.category_id,
            title=payload.title,
            description=payload.description,
            due_date=payload.due_date,
            reviewing=payload.reviewing,
            private_review=payload.private_review,
        )
    except ActivityRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.patch("/{activity_id}", response_model=CourseActivity, summary="Edit an activity")
def update_activity(
    activity_id: str,
    payload: ActivityUpdate,
    repos: Repositories = Depends(get_repositories),
) -> CourseActivity:
    try:
        return activity_service.update_activity(
            repos,
            teacher_id=payload.teacher_id,
            activity_id=activity_id,
            title=payload.title,
            description=payload.description,
            due_date=payload.due_date,
        )
    except ActivityRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.patch(
    "/{activity_id}/reviewing",
    response_model=CourseActivity,
    summary="Open or close peer review",
)
def set_reviewing(
    activity_id: str,
    payload: ActivityReviewUpdate,
    repos: Repositories = Depends(get_repositories),
) -> CourseActivity:
    """Toggle the review window; ``private_review`` hides results from students.

    Example request body::

        {"teacher_id": "teacher-1", "reviewing": false, "private_review": true}
    """

    try:
        return activity_service.set_reviewing(
            repos,
            teacher_id=payload.teacher_id,
            activity_id=activity_id,
            reviewing=payload.reviewing,
            private_review=payload.private_review,
        )
    except ActivityRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Deactivate an activity")
def delete_activity(
    activity_id: str,
    teacher_id: str = Query(..., min_length=1),
    repos: Repositories = Depends(get_repositories),
) -> Response:
    try:
        activity_service.delete_activity(repos, teacher_id=teacher_id, activity_id=activity_id)
    except ActivityRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
