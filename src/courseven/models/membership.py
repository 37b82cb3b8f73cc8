"""Membership table mirrored by the local backend."""

from sqlalchemy import Boolean, Column, String

from ..core.database import Base
from ..utils.datetime import utc_now_iso
from .course import new_record_id


class Membership(Base):
    """Student membership in a group."""

    __tablename__ = "memberships"

    id = Column("_id", String, primary_key=True, default=new_record_id)
    user_id = Column(String, nullable=False)
    group_id = Column(String, nullable=False)
    # column name as provisioned on the remote store
    joinet_at = Column(String, nullable=False, default=utc_now_iso)
    is_active = Column(Boolean, nullable=False, default=True)
