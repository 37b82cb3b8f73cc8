"""Assessment table mirrored by the local backend."""

from sqlalchemy import CheckConstraint, Column, Integer, String, UniqueConstraint

from ..core.database import Base
from ..utils.datetime import utc_now_iso
from .course import new_record_id

ASSESSMENTS_TABLE = "assestments"


class Assessment(Base):
    """One reviewer's scores for one peer in one activity."""

    __tablename__ = ASSESSMENTS_TABLE
    __table_args__ = (
        UniqueConstraint("activity_id", "reviewer", "reviewed", name="assessments_review_unique"),
        CheckConstraint("reviewer <> reviewed", name="assessments_reviewer_reviewed_check"),
        CheckConstraint("punctuality_score BETWEEN 2 AND 5", name="assessments_punctuality_range"),
        CheckConstraint("contributions_score BETWEEN 2 AND 5", name="assessments_contributions_range"),
        CheckConstraint("commitment_score BETWEEN 2 AND 5", name="assessments_commitment_range"),
        CheckConstraint("attitude_score BETWEEN 2 AND 5", name="assessments_attitude_range"),
    )

    id = Column("_id", String, primary_key=True, default=new_record_id)
    activity_id = Column(String, nullable=False)
    group_id = Column(String)
    reviewer = Column(String, nullable=False)
    reviewed = Column(String, nullable=False)
    punctuality_score = Column(Integer, nullable=False)
    contributions_score = Column(Integer, nullable=False)
    commitment_score = Column(Integer, nullable=False)
    attitude_score = Column(Integer, nullable=False)
    # one implied decimal digit: 4.3 is stored as 43
    overall_score = Column(Integer)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    updated_at = Column(String)
