"""Course activity table mirrored by the local backend."""

from sqlalchemy import Boolean, Column, String

from ..core.database import Base
from ..utils.datetime import utc_now_iso
from .course import new_record_id


class CourseActivity(Base):
    """Activity whose peer reviews are aggregated."""

    __tablename__ = "activities"

    id = Column("_id", String, primary_key=True, default=new_record_id)
    title = Column(String, nullable=False)
    description = Column(String)
    category_id = Column(String, nullable=False)
    course_id = Column(String, nullable=False)
    created_by = Column(String, nullable=False)
    due_date = Column(String)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    is_active = Column(Boolean, nullable=False, default=True)
    reviewing = Column(Boolean, nullable=False, default=False)
    private_review = Column(Boolean, nullable=False, default=False)
