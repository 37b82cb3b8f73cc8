"""Group table mirrored by the local backend."""

from sqlalchemy import Boolean, Column, String

from ..core.database import Base
from ..utils.datetime import utc_now_iso
from .course import new_record_id


class Group(Base):
    """Group inside a category."""

    __tablename__ = "groups"

    id = Column("_id", String, primary_key=True, default=new_record_id)
    name = Column(String, nullable=False)
    category_id = Column(String, nullable=False)
    course_id = Column(String, nullable=False)
    teacher_id = Column(String, nullable=False)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    is_active = Column(Boolean, nullable=False, default=True)
