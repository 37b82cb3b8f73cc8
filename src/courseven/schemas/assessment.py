"""Pydantic schemas for peer assessments."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

SCORE_SCALE = (2, 3, 4, 5)


class Assessment(BaseModel):
    """One reviewer's scores for one peer; immutable once created."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    activity_id: str
    group_id: str = ""
    reviewer_id: str
    student_id: str
    punctuality_score: int = 0
    contributions_score: int = 0
    commitment_score: int = 0
    attitude_score: int = 0
    overall_score: Optional[float] = None
    created_at: str = ""
    updated_at: Optional[str] = None

    @property
    def record_overall(self) -> float:
        """Unrounded mean of the four criteria for this single record."""

        return (
            self.punctuality_score
            + self.contributions_score
            + self.commitment_score
            + self.attitude_score
        ) / 4.0


class AssessmentCreate(BaseModel):
    """Request body for submitting a peer review."""

    activity_id: str = Field(..., min_length=1)
    group_id: str = ""
    reviewer_id: str = Field(..., min_length=1)
    student_id: str = Field(..., min_length=1)
    punctuality_score: int = Field(..., ge=2, le=5)
    contributions_score: int = Field(..., ge=2, le=5)
    commitment_score: int = Field(..., ge=2, le=5)
    attitude_score: int = Field(..., ge=2, le=5)
