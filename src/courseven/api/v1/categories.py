"""Endpoints for grouping categories."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...repositories import Repositories
from ...schemas import Category, CategoryCreate, Group
from ...services import category_service, group_service
from ...services.category_service import CategoryRuleViolation
from ..dependencies import get_repositories

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post(
    "",
    response_model=Category,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses={
        400: {"description": "Business rule violation"},
        403: {"description": "Course owned by another teacher"},
        404: {"description": "Course not found"},
    },
)
def create_category(
    payload: CategoryCreate,
    repos: Repositories = Depends(get_repositories),
) -> Category:
    """Create a manual or random category in a course.

    Example request body::

        {
            "teacher_id": "teacher-1",
            "course_id": "6b1f0c1a9d3e4f6a8b2c7d9e0f1a2b3c",
            "name": "Project teams",
            "grouping_method": "random",
            "max_members_per_group": 4
        }
    """

    try:
        return category_service.create_category(
            repos,
            teacher_id=payload.teacher_id,
            course_id=payload.course_id,
            name=payload.name,
            description=payload.description,
            grouping_method=payload.grouping_method,
            max_members_per_group=payload.max_members_per_group,
        )
    except CategoryRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get("/{category_id}/groups", response_model=list[Group], summary="List a category's groups")
def list_category_groups(
    category_id: str,
    repos: Repositories = Depends(get_repositories),
) -> list[Group]:
    return group_service.list_category_groups(repos, category_id=category_id)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Deactivate a category")
def delete_category(
    category_id: str,
    teacher_id: str = Query(..., min_length=1),
    repos: Repositories = Depends(get_repositories),
) -> Response:
    try:
        category_service.delete_category(repos, teacher_id=teacher_id, category_id=category_id)
    except CategoryRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
