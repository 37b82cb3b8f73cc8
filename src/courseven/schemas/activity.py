"""Pydantic schema for course activities."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseActivity(BaseModel):
    """Activity in a category whose members review each other."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    category_id: str
    course_id: str
    created_by: str
    due_date: Optional[str] = None
    created_at: str
    is_active: bool = True
    reviewing: bool = False
    private_review: bool = False


class ActivityCreate(BaseModel):
    """Request body for creating an activity in a category."""

    teacher_id: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: Optional[str] = Field(None, description="ISO-8601 due date, if any.")
    reviewing: bool = False
    private_review: bool = False


class ActivityUpdate(BaseModel):
    """Partial update of an activity; omitted fields keep their value."""

    teacher_id: str = Field(..., min_length=1)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: Optional[str] = None


class ActivityReviewUpdate(BaseModel):
    """Opens or closes the peer-review window of an activity."""

    teacher_id: str = Field(..., min_length=1)
    reviewing: bool
    private_review: Optional[bool] = None
