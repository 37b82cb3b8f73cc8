"""Repositories translating table store records into domain entities."""

from dataclasses import dataclass
from typing import Optional

from ..core.gateway import TableGateway
from .activity_repository import ActivityRepository
from .assessment_repository import AssessmentRepository
from .base import AccessTokenProvider, TableRepository
from .category_repository import CategoryRepository
from .course_repository import CourseRepository
from .enrollment_repository import EnrollmentRepository
from .group_repository import GroupRepository
from .membership_repository import MembershipRepository

__all__ = [
    "AccessTokenProvider",
    "ActivityRepository",
    "AssessmentRepository",
    "CategoryRepository",
    "CourseRepository",
    "EnrollmentRepository",
    "GroupRepository",
    "MembershipRepository",
    "Repositories",
    "TableRepository",
    "build_repositories",
]


@dataclass(frozen=True)
class Repositories:
    """Every repository bound to one gateway and one token provider."""

    courses: CourseRepository
    categories: CategoryRepository
    groups: GroupRepository
    memberships: MembershipRepository
    enrollments: EnrollmentRepository
    activities: ActivityRepository
    assessments: AssessmentRepository


def build_repositories(
    gateway: TableGateway,
    get_access_token: Optional[AccessTokenProvider],
    *,
    tolerate_assessment_read_errors: bool = True,
) -> Repositories:
    return Repositories(
        courses=CourseRepository(gateway, get_access_token),
        categories=CategoryRepository(gateway, get_access_token),
        groups=GroupRepository(gateway, get_access_token),
        memberships=MembershipRepository(gateway, get_access_token),
        enrollments=EnrollmentRepository(gateway, get_access_token),
        activities=ActivityRepository(gateway, get_access_token),
        assessments=AssessmentRepository(
            gateway,
            get_access_token,
            tolerate_read_errors=tolerate_assessment_read_errors,
        ),
    )
