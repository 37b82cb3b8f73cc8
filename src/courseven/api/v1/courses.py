"""Endpoints for teacher-owned courses."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...core.config import Settings
from ...repositories import Repositories
from ...schemas import Category, Course, CourseActiveUpdate, CourseActivity, CourseCreate
from ...services import activity_service, category_service, course_service
from ...services.course_service import CourseRuleViolation
from ..dependencies import get_app_settings, get_repositories

router = APIRouter(prefix="/courses", tags=["courses"])


@router.post(
    "",
    response_model=Course,
    status_code=status.HTTP_201_CREATED,
    summary="Create a course",
    responses={
        201: {
            "description": "Course created",
            "content": {
                "application/json": {
                    "example": {
                        "id": "6b1f0c1a9d3e4f6a8b2c7d9e0f1a2b3c",
                        "name": "Mobile Development",
                        "description": "Spring cohort",
                        "join_code": "K3Z9QX",
                        "teacher_id": "teacher-1",
                        "created_at": "2025-02-03T14:30:00+00:00",
                        "is_active": True,
                    }
                }
            },
        },
        400: {"description": "Business rule violation"},
    },
)
def create_course(
    payload: CourseCreate,
    repos: Repositories = Depends(get_repositories),
    settings: Settings = Depends(get_app_settings),
) -> Course:
    """Create an active course with a generated join code.

    Example request body::

        {
            "teacher_id": "teacher-1",
            "name": "Mobile Development",
            "description": "Spring cohort"
        }
    """

    try:
        return course_service.create_course(
            repos,
            teacher_id=payload.teacher_id,
            name=payload.name,
            description=payload.description,
            max_courses=settings.max_courses_per_teacher,
        )
    except CourseRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("", response_model=list[Course], summary="List a teacher's courses")
def list_courses(
    teacher_id: str = Query(..., min_length=1),
    repos: Repositories = Depends(get_repositories),
) -> list[Course]:
    return course_service.list_teacher_courses(repos, teacher_id=teacher_id)


@router.patch(
    "/{course_id}/active",
    response_model=Course,
    summary="Enable or disable a course",
    responses={
        400: {"description": "Active course limit reached"},
        403: {"description": "Course owned by another teacher"},
        404: {"description": "Course not found"},
    },
)
def set_course_active(
    course_id: str,
    payload: CourseActiveUpdate,
    repos: Repositories = Depends(get_repositories),
    settings: Settings = Depends(get_app_settings),
) -> Course:
    """Toggle a course.

    Example request body::

        {
            "teacher_id": "teacher-1",
            "is_active": false
        }
    """

    try:
        return course_service.set_course_active(
            repos,
            teacher_id=payload.teacher_id,
            course_id=course_id,
            active=payload.is_active,
            max_courses=settings.max_courses_per_teacher,
        )
    except CourseRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.delete("/{course_id}", response_model=Course, summary="Deactivate a course")
def delete_course(
    course_id: str,
    teacher_id: str = Query(..., min_length=1),
    repos: Repositories = Depends(get_repositories),
) -> Course:
    try:
        return course_service.delete_course(repos, teacher_id=teacher_id, course_id=course_id)
    except CourseRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/{course_id}/categories", response_model=list[Category], summary="List a course's categories")
def list_course_categories(
    course_id: str,
    repos: Repositories = Depends(get_repositories),
) -> list[Category]:
    return category_service.list_course_categories(repos, course_id=course_id)


@router.get("/{course_id}/activities", response_model=list[CourseActivity], summary="List a course's activities")
def list_course_activities(
    course_id: str,
    repos: Repositories = Depends(get_repositories),
) -> list[CourseActivity]:
    return activity_service.list_course_activities(repos, course_id=course_id)
