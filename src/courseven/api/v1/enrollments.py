"""Endpoint for joining a course by code."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...repositories import Repositories
from ...schemas import Enrollment, EnrollmentCreate
from ...services import enrollment_service
from ...services.enrollment_service import EnrollmentRuleViolation
from ..dependencies import get_repositories

router = APIRouter(prefix="/enrollments", tags=["enrollments"])


@router.post(
    "",
    response_model=Enrollment,
    status_code=status.HTTP_201_CREATED,
    summary="Enroll in a course",
    responses={
        201: {
            "description": "Enrollment created or reactivated",
            "content": {
                "application/json": {
                    "example": {
                        "id": "1f2e3d4c5b6a79880f1e2d3c4b5a6978",
                        "student_id": "student-7",
                        "course_id": "6b1f0c1a9d3e4f6a8b2c7d9e0f1a2b3c",
                        "enrolled_at": "2025-02-04T09:12:00+00:00",
                        "is_active": True,
                    }
                }
            },
        },
        400: {"description": "Teacher of the course"},
        404: {"description": "Unknown join code or inactive course"},
        409: {"description": "Already enrolled"},
    },
)
def enroll(
    payload: EnrollmentCreate,
    repos: Repositories = Depends(get_repositories),
) -> Enrollment:
    """Enroll with a join code; random categories seat the student automatically.

    Example request body::

        {
            "user_id": "student-7",
            "join_code": "K3Z9QX"
        }
    """

    try:
        return enrollment_service.enroll_to_course(repos, user_id=payload.user_id, join_code=payload.join_code)
    except EnrollmentRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
