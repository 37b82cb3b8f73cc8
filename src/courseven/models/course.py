"""Course table mirrored by the local backend."""

import uuid

from sqlalchemy import Boolean, Column, String

from ..core.database import Base
from ..utils.datetime import utc_now_iso


def new_record_id() -> str:
    return uuid.uuid4().hex


class Course(Base):
    """Course owned by a teacher and joined through its join code."""

    __tablename__ = "courses"

    id = Column("_id", String, primary_key=True, default=new_record_id)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    join_code = Column(String)
    teacher_id = Column(String, nullable=False)
    created_at = Column(String, nullable=False, default=utc_now_iso)
    is_active = Column(Boolean, nullable=False, default=True)
