"""SQLAlchemy tables for the local table backend."""

from .activity import CourseActivity
from .assessment import ASSESSMENTS_TABLE, Assessment
from .category import Category
from .course import Course, new_record_id
from .enrollment import Enrollment
from .group import Group
from .membership import Membership

__all__ = [
    "ASSESSMENTS_TABLE",
    "Assessment",
    "Category",
    "Course",
    "CourseActivity",
    "Enrollment",
    "Group",
    "Membership",
    "new_record_id",
]
