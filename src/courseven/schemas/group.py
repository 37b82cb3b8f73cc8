"""Pydantic schemas for groups and memberships."""

from pydantic import BaseModel, ConfigDict, Field


class Group(BaseModel):
    """Group owned by one category; course_id mirrors the category's course."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    category_id: str
    course_id: str
    teacher_id: str
    created_at: str
    is_active: bool = True


class GroupCreate(BaseModel):
    """Request body for creating a group."""

    teacher_id: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=120)


class Membership(BaseModel):
    """A student's seat in a group."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    group_id: str
    joined_at: str
    is_active: bool = True


class MembershipCreate(BaseModel):
    """Request body for joining a manual group."""

    user_id: str = Field(..., min_length=1)


class GroupCreated(BaseModel):
    """Response returned after creating a group."""

    group: Group
    assigned: list[Membership] = Field(
        default_factory=list,
        description="Memberships created by backfilling a random category.",
    )
