from typing import Optional

import pytest

from courseven.core.auth import StaticTokenProvider
from courseven.core.database import create_session_factory
from courseven.core.local_gateway import LocalTableGateway
from courseven.repositories import Repositories, build_repositories
from courseven.schemas import (
    AssessmentCreate,
    Category,
    Course,
    CourseActivity,
    Enrollment,
    Group,
    Membership,
)
from courseven.utils.datetime import utc_now_iso

TEACHER_ID = "teacher-1"


class Seeder:
    """Writes fixture rows straight through the repositories."""

    def __init__(self, repos: Repositories) -> None:
        self.repos = repos

    def course(self, *, join_code: str = "ABC123", teacher_id: str = TEACHER_ID, is_active: bool = True) -> Course:
        return self.repos.courses.create_course(
            Course(
                id="",
                name="Mobile Development",
                join_code=join_code,
                teacher_id=teacher_id,
                created_at=utc_now_iso(),
                is_active=is_active,
            )
        )

    def category(
        self,
        course: Course,
        *,
        name: str = "Teams",
        grouping_method: str = "random",
        capacity: Optional[int] = None,
    ) -> Category:
        return self.repos.categories.create_category(
            Category(
                id="",
                name=name,
                course_id=course.id,
                teacher_id=course.teacher_id,
                grouping_method=grouping_method,
                max_members_per_group=capacity,
                created_at=utc_now_iso(),
            )
        )

    def group(self, category: Category, *, name: str = "G1") -> Group:
        return self.repos.groups.create_group(
            Group(
                id="",
                name=name,
                category_id=category.id,
                course_id=category.course_id,
                teacher_id=category.teacher_id,
                created_at=utc_now_iso(),
            )
        )

    def member(self, group: Group, user_id: str) -> Membership:
        return self.repos.memberships.create_membership(
            Membership(id="", user_id=user_id, group_id=group.id, joined_at=utc_now_iso())
        )

    def enrollment(self, course: Course, student_id: str, *, is_active: bool = True) -> Enrollment:
        return self.repos.enrollments.create_enrollment(
            Enrollment(
                id="",
                student_id=student_id,
                course_id=course.id,
                enrolled_at=utc_now_iso(),
                is_active=is_active,
            )
        )

    def activity(self, category: Category, *, title: str = "Sprint 1") -> CourseActivity:
        return self.repos.activities.create_activity(
            CourseActivity(
                id="",
                title=title,
                category_id=category.id,
                course_id=category.course_id,
                created_by=category.teacher_id,
                created_at=utc_now_iso(),
            )
        )

    def assessment(
        self,
        *,
        activity_id: str,
        reviewer_id: str,
        student_id: str,
        scores: tuple[int, int, int, int] = (4, 4, 4, 4),
        group_id: str = "",
    ):
        punctuality, contributions, commitment, attitude = scores
        return self.repos.assessments.create_assessment(
            AssessmentCreate(
                activity_id=activity_id,
                group_id=group_id,
                reviewer_id=reviewer_id,
                student_id=student_id,
                punctuality_score=punctuality,
                contributions_score=contributions,
                commitment_score=commitment,
                attitude_score=attitude,
            )
        )


@pytest.fixture
def gateway() -> LocalTableGateway:
    return LocalTableGateway(create_session_factory("sqlite://"))


@pytest.fixture
def repos(gateway: LocalTableGateway) -> Repositories:
    return build_repositories(gateway, StaticTokenProvider("test-token"))


@pytest.fixture
def seed(repos: Repositories) -> Seeder:
    return Seeder(repos)
