"""Assessment persistence over the ``assestments`` table."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import TableGatewayError
from ..core.gateway import QueryValue, TableGateway
from ..models import ASSESSMENTS_TABLE
from ..schemas import Assessment, AssessmentCreate
from ..utils.datetime import utc_now_iso
from ..utils.rounding import round_half_up
from .base import AccessTokenProvider, TableRepository
from .records import record_id, to_int, to_optional_str, to_str

logger = logging.getLogger(__name__)


def encode_overall(overall: float) -> int:
    """Fixed-point wire value: rounded to one decimal, then scaled by 10."""

    return int(round_half_up(round_half_up(overall, 1) * 10, 0))


def assessment_from_record(raw: Mapping[str, Any]) -> Assessment:
    punctuality = to_int(raw.get("punctuality_score"))
    contributions = to_int(raw.get("contributions_score"))
    commitment = to_int(raw.get("commitment_score"))
    attitude = to_int(raw.get("attitude_score"))

    stored = raw.get("overall_score")
    if stored is not None:
        overall = float(stored) / 10
    else:
        overall = (punctuality + contributions + commitment + attitude) / 4.0

    return Assessment(
        id=record_id(raw),
        activity_id=to_str(raw.get("activity_id")),
        group_id=to_str(raw.get("group_id")),
        reviewer_id=to_str(raw.get("reviewer")),
        student_id=to_str(raw.get("reviewed")),
        punctuality_score=punctuality,
        contributions_score=contributions,
        commitment_score=commitment,
        attitude_score=attitude,
        overall_score=overall,
        created_at=to_str(raw.get("created_at")),
        updated_at=to_optional_str(raw.get("updated_at")),
    )


class AssessmentRepository(TableRepository):
    table = ASSESSMENTS_TABLE

    def __init__(
        self,
        gateway: TableGateway,
        get_access_token: Optional[AccessTokenProvider] = None,
        *,
        tolerate_read_errors: bool = True,
    ) -> None:
        super().__init__(gateway, get_access_token)
        self._tolerate_read_errors = tolerate_read_errors

    def get_assessments_by_activity(self, activity_id: str) -> list[Assessment]:
        return self._read_assessments({"activity_id": activity_id})

    def get_assessments_by_reviewer(self, activity_id: str, reviewer_id: str) -> list[Assessment]:
        return self._read_assessments({"activity_id": activity_id, "reviewer": reviewer_id})

    def get_assessments_received_by_student(self, activity_id: str, student_id: str) -> list[Assessment]:
        return self._read_assessments({"activity_id": activity_id, "reviewed": student_id})

    def get_assessments_for_student_across_activities(
        self, activity_ids: Sequence[str], student_id: str
    ) -> list[Assessment]:
        collected: list[Assessment] = []
        for activity_id in activity_ids:
            collected.extend(self.get_assessments_received_by_student(activity_id, student_id))
        return collected

    def exists_assessment(self, *, activity_id: str, reviewer_id: str, student_id: str) -> bool:
        rows = self._read_assessments(
            {"activity_id": activity_id, "reviewer": reviewer_id, "reviewed": student_id}
        )
        return len(rows) > 0

    def create_assessment(self, payload: AssessmentCreate) -> Assessment:
        """Insert a review and make sure its overall score is persisted."""

        overall = (
            payload.punctuality_score
            + payload.contributions_score
            + payload.commitment_score
            + payload.attitude_score
        ) / 4.0
        stored_overall = encode_overall(overall)
        record = {
            "activity_id": payload.activity_id,
            "group_id": payload.group_id,
            "reviewer": payload.reviewer_id,
            "reviewed": payload.student_id,
            "punctuality_score": payload.punctuality_score,
            "contributions_score": payload.contributions_score,
            "commitment_score": payload.commitment_score,
            "attitude_score": payload.attitude_score,
            "overall_score": stored_overall,
        }
        raw = self._insert_one(record)

        generated_id = record_id(raw)
        if not generated_id:
            logger.warning("assessment insert returned no _id for activity %s", payload.activity_id)
        if raw.get("overall_score") is None and generated_id:
            try:
                self._update(generated_id, {"overall_score": stored_overall})
            except TableGatewayError:
                logger.exception("could not persist overall_score for assessment %s", generated_id)

        enriched = {
            **record,
            **{key: value for key, value in raw.items() if value is not None},
            "created_at": raw.get("created_at") or utc_now_iso(),
        }
        if enriched.get("overall_score") is None:
            enriched["overall_score"] = stored_overall
        return assessment_from_record(enriched)

    def _read_assessments(self, query: Mapping[str, QueryValue]) -> list[Assessment]:
        try:
            rows = self._read(query)
        except TableGatewayError as exc:
            if self._tolerate_read_errors and exc.http_status == 500:
                logger.warning("assessment read returned 500 for query=%s, assuming no rows", dict(query))
                return []
            raise
        return [assessment_from_record(row) for row in rows]
