"""Pydantic schemas for categories."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MANUAL = "manual"
RANDOM = "random"


def is_grouping_method(value: Optional[str], expected: str) -> bool:
    """Case-insensitive grouping method comparison."""

    return (value or "").strip().lower() == expected


def capacity_of(max_members_per_group: Optional[int]) -> Optional[int]:
    """Return the group capacity, or ``None`` when groups are unlimited."""

    if max_members_per_group is None or max_members_per_group <= 0:
        return None
    return max_members_per_group


class Category(BaseModel):
    """Grouping policy owned by exactly one course."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    course_id: str
    teacher_id: str
    grouping_method: str = MANUAL
    max_members_per_group: Optional[int] = None
    created_at: str
    is_active: bool = True

    @property
    def is_random(self) -> bool:
        return is_grouping_method(self.grouping_method, RANDOM)

    @property
    def is_manual(self) -> bool:
        return is_grouping_method(self.grouping_method, MANUAL)

    @property
    def capacity(self) -> Optional[int]:
        return capacity_of(self.max_members_per_group)


class CategoryCreate(BaseModel):
    """Request body for creating a category."""

    teacher_id: str = Field(..., min_length=1)
    course_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = Field(None, max_length=1000)
    grouping_method: str = MANUAL
    max_members_per_group: Optional[int] = Field(
        None,
        description="Members allowed per group; empty or non-positive means unlimited.",
    )

    @field_validator("grouping_method")
    @classmethod
    def _normalise_grouping_method(cls, value: str) -> str:
        method = value.strip().lower()
        if method not in (MANUAL, RANDOM):
            raise ValueError("grouping_method must be 'manual' or 'random'")
        return method
