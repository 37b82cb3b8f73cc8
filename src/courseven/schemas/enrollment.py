"""Pydantic schemas for course enrollment."""

from pydantic import BaseModel, ConfigDict, Field


class Enrollment(BaseModel):
    """At most one current enrollment per (student, course)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    course_id: str
    enrolled_at: str
    is_active: bool = True


class EnrollmentCreate(BaseModel):
    """Request body for joining a course by code."""

    user_id: str = Field(..., min_length=1)
    join_code: str = Field(..., min_length=1, max_length=32)
