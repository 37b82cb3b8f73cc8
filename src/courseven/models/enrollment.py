"""Enrollment table mirrored by the local backend."""

from sqlalchemy import Boolean, Column, String, UniqueConstraint

from ..core.database import Base
from ..utils.datetime import utc_now_iso
from .course import new_record_id


class Enrollment(Base):
    """Student enrollment in a course; reactivated rather than duplicated."""

    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="enrollments_user_course_unique"),
    )

    id = Column("_id", String, primary_key=True, default=new_record_id)
    user_id = Column(String, nullable=False)
    course_id = Column(String, nullable=False)
    enrolled_at = Column(String, nullable=False, default=utc_now_iso)
    is_active = Column(Boolean, nullable=False, default=True)
    status = Column(String, nullable=False, default="active")
