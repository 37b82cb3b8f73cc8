"""Category table mirrored by the local backend."""

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, String

from ..core.database import Base
from ..utils.datetime import utc_now_iso
from .course import new_record_id


class Category(Base):
    """Grouping policy attached to a course."""

    __tablename__ = "categories"
    __table_args__ = (
        CheckConstraint("lower(grouping_method) IN ('manual', 'random')", name="categories_grouping_method_check"),
    )

    id = Column("_id", String, primary_key=True, default=new_record_id)
    name = Column(String, nullable=False)
    description = Column(String)
    course_id = Column(String, nullable=False)
    teacher_id = Column(String, nullable=False)
    grouping_method = Column(String, nullable=False, default="manual")
    max_members_per_group = Column(Integer)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    is_active = Column(Boolean, nullable=False, default=True)
