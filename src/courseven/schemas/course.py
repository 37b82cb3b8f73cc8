"""Pydantic schemas for courses."""

from pydantic import BaseModel, ConfigDict, Field


class Course(BaseModel):
    """Course as seen by the domain layer."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str = ""
    join_code: str = ""
    teacher_id: str
    created_at: str
    is_active: bool = True


class CourseCreate(BaseModel):
    """Request body for creating a course."""

    teacher_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=120)
    description: str = Field("", max_length=1000)


class CourseActiveUpdate(BaseModel):
    """Request body for enabling or disabling a course."""

    teacher_id: str = Field(..., min_length=1)
    is_active: bool
