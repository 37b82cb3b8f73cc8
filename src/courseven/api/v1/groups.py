"""Endpoints for groups and manual membership."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...repositories import Repositories
from ...schemas import GroupCreate, GroupCreated, Membership, MembershipCreate
from ...services import group_service, membership_service
from ...services.group_service import GroupRuleViolation
from ...services.membership_service import MembershipRuleViolation
from ..dependencies import get_repositories

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post(
    "",
    response_model=GroupCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Create a group",
    responses={
        400: {"description": "Business rule violation"},
        403: {"description": "Category owned by another teacher"},
        404: {"description": "Category not found"},
    },
)
def create_group(
    payload: GroupCreate,
    repos: Repositories = Depends(get_repositories),
) -> GroupCreated:
    """Create a group; in a random category unplaced students are seated right away.

    Example request body::

        {
            "teacher_id": "teacher-1",
            "category_id": "0c5d1e2f3a4b5c6d7e8f9a0b1c2d3e4f",
            "name": "Team 3"
        }
    """

    try:
        group, assigned = group_service.create_group(
            repos,
            teacher_id=payload.teacher_id,
            name=payload.name,
            category_id=payload.category_id,
        )
    except GroupRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return GroupCreated(group=group, assigned=assigned)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Deactivate a group")
def delete_group(
    group_id: str,
    teacher_id: str = Query(..., min_length=1),
    repos: Repositories = Depends(get_repositories),
) -> Response:
    try:
        group_service.delete_group(repos, teacher_id=teacher_id, group_id=group_id)
    except GroupRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{group_id}/members",
    response_model=Membership,
    status_code=status.HTTP_201_CREATED,
    summary="Join a manual group",
    responses={
        400: {"description": "Category is not manual"},
        404: {"description": "Group or category not found"},
        409: {"description": "Already a member, already grouped in the category, or group full"},
    },
)
def join_group(
    group_id: str,
    payload: MembershipCreate,
    repos: Repositories = Depends(get_repositories),
) -> Membership:
    """Join a group of a manual category.

    Example request body::

        {
            "user_id": "student-7"
        }
    """

    try:
        return membership_service.join_group(repos, user_id=payload.user_id, group_id=group_id)
    except MembershipRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.delete("/{group_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Leave a group")
def leave_group(
    group_id: str,
    user_id: str,
    repos: Repositories = Depends(get_repositories),
) -> Response:
    try:
        membership_service.leave_group(repos, user_id=user_id, group_id=group_id)
    except MembershipRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
