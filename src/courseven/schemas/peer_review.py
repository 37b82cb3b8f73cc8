"""Peer-review summary schemas."""

from pydantic import BaseModel, Field

from .assessment import Assessment


class ScoreAverages(BaseModel):
    """Means of the four criteria plus the overall score, rounded to 2 decimals."""

    punctuality: float = 0
    contributions: float = 0
    commitment: float = 0
    attitude: float = 0
    overall: float = 0


class StudentActivityReviewStats(BaseModel):
    student_id: str
    received_count: int = Field(..., ge=0)
    averages: ScoreAverages


class GroupActivityReviewStats(BaseModel):
    group_id: str
    averages: ScoreAverages
    students: list[StudentActivityReviewStats]


class ActivityPeerReviewSummary(BaseModel):
    """Rollup of one activity, per group and per reviewed student."""

    activity_id: str
    activity_averages: ScoreAverages
    groups: list[GroupActivityReviewStats]


class StudentCrossActivityStats(BaseModel):
    student_id: str
    assessments_received: int = Field(..., ge=0)
    averages: ScoreAverages


class GroupCrossActivityStats(BaseModel):
    group_id: str
    assessments_count: int = Field(..., ge=0)
    averages: ScoreAverages


class CoursePeerReviewSummary(BaseModel):
    """Rollup across several activities of a course."""

    students: list[StudentCrossActivityStats] = Field(default_factory=list)
    groups: list[GroupCrossActivityStats] = Field(default_factory=list)


class StudentPeerReviewResults(BaseModel):
    """Reviews one student received, newest first, with their averages."""

    student_id: str
    activity_ids: list[str] = Field(default_factory=list)
    assessments_received: int = Field(0, ge=0)
    averages: ScoreAverages = Field(default_factory=ScoreAverages)
    received: list[Assessment] = Field(default_factory=list)
