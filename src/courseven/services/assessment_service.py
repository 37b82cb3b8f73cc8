"""Submitting peer reviews."""

from __future__ import annotations

import logging

from ..repositories import Repositories
from ..schemas import SCORE_SCALE, Assessment, AssessmentCreate

logger = logging.getLogger(__name__)


class AssessmentRuleViolation(Exception):
    """Raised when a peer review cannot be accepted."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


def submit_assessment(repos: Repositories, *, payload: AssessmentCreate) -> Assessment:
    """Store one reviewer's scores for one peer; each pair may review once per activity."""

    if payload.reviewer_id == payload.student_id:
        raise AssessmentRuleViolation("You cannot review yourself")

    scores = (
        payload.punctuality_score,
        payload.contributions_score,
        payload.commitment_score,
        payload.attitude_score,
    )
    if any(score not in SCORE_SCALE for score in scores):
        raise AssessmentRuleViolation(f"Scores must be one of {', '.join(map(str, SCORE_SCALE))}")

    if repos.assessments.exists_assessment(
        activity_id=payload.activity_id,
        reviewer_id=payload.reviewer_id,
        student_id=payload.student_id,
    ):
        raise AssessmentRuleViolation("You already reviewed this student for this activity", status_code=409)

    assessment = repos.assessments.create_assessment(payload)
    logger.info(
        "assessment %s stored: %s reviewed %s in activity %s",
        assessment.id,
        payload.reviewer_id,
        payload.student_id,
        payload.activity_id,
    )
    return assessment
