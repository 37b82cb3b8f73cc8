import pytest

from courseven.core.exceptions import MissingAccessToken, TableGatewayError
from courseven.services import enrollment_service
from courseven.services.enrollment_service import (
    EnrollmentRuleViolation,
    InvalidJoinCode,
    enroll_to_course,
)


class TestEnrollToCourse:
    def test_creates_enrollment_and_trims_code(self, repos, seed):
        course = seed.course(join_code="ABC123")

        enrollment = enroll_to_course(repos, user_id="s1", join_code="  ABC123 ")

        assert enrollment.course_id == course.id
        assert enrollment.student_id == "s1"
        assert enrollment.is_active is True
        assert [e.id for e in repos.enrollments.get_enrollments_by_course(course.id)] == [enrollment.id]

    def test_unknown_code(self, repos, seed):
        seed.course(join_code="ABC123")
        with pytest.raises(InvalidJoinCode):
            enroll_to_course(repos, user_id="s1", join_code="ZZZ999")

    def test_blank_code(self, repos):
        with pytest.raises(InvalidJoinCode):
            enroll_to_course(repos, user_id="s1", join_code="   ")

    def test_inactive_course(self, repos, seed):
        seed.course(join_code="ABC123", is_active=False)
        with pytest.raises(InvalidJoinCode) as excinfo:
            enroll_to_course(repos, user_id="s1", join_code="ABC123")
        assert excinfo.value.status_code == 404

    def test_teacher_cannot_enroll(self, repos, seed):
        seed.course(join_code="ABC123", teacher_id="teacher-1")
        with pytest.raises(EnrollmentRuleViolation, match="teacher"):
            enroll_to_course(repos, user_id="teacher-1", join_code="ABC123")

    def test_already_enrolled(self, repos, seed):
        seed.course(join_code="ABC123")
        enroll_to_course(repos, user_id="s1", join_code="ABC123")
        with pytest.raises(EnrollmentRuleViolation, match="already enrolled") as excinfo:
            enroll_to_course(repos, user_id="s1", join_code="ABC123")
        assert excinfo.value.status_code == 409

    def test_inactive_enrollment_is_reactivated_in_place(self, repos, seed):
        course = seed.course(join_code="ABC123")
        previous = seed.enrollment(course, "s1", is_active=False)

        enrollment = enroll_to_course(repos, user_id="s1", join_code="ABC123")

        assert enrollment.id == previous.id
        assert enrollment.is_active is True
        assert enrollment.enrolled_at >= previous.enrolled_at
        assert len(repos.enrollments.get_enrollments_by_student("s1")) == 1

    def test_places_student_in_random_category(self, repos, seed):
        course = seed.course(join_code="ABC123")
        category = seed.category(course, capacity=2)
        full = seed.group(category, name="G1")
        open_group = seed.group(category, name="G2")
        seed.member(full, "s1")
        seed.member(full, "s2")

        enroll_to_course(repos, user_id="s3", join_code="ABC123")

        assert repos.memberships.is_user_member_of_group("s3", open_group.id)

    def test_assignment_failure_does_not_fail_enrollment(self, repos, seed, monkeypatch, caplog):
        seed.course(join_code="ABC123")

        def broken(*args, **kwargs):
            raise TableGatewayError("memberships", 500, "boom")

        monkeypatch.setattr(enrollment_service, "assign_on_enrollment", broken)

        enrollment = enroll_to_course(repos, user_id="s1", join_code="ABC123")

        assert enrollment.is_active is True
        assert "auto-assignment failed" in caplog.text

    @pytest.mark.parametrize(
        "error",
        [ValueError("bad record from store"), KeyError("category_id"), MissingAccessToken()],
    )
    def test_any_assignment_error_is_logged_not_raised(self, repos, seed, monkeypatch, caplog, error):
        course = seed.course(join_code="ABC123")

        def broken(*args, **kwargs):
            raise error

        monkeypatch.setattr(enrollment_service, "assign_on_enrollment", broken)

        enrollment = enroll_to_course(repos, user_id="s1", join_code="ABC123")

        assert enrollment.course_id == course.id
        assert [e.id for e in repos.enrollments.get_enrollments_by_student("s1")] == [enrollment.id]
        assert "auto-assignment failed" in caplog.text
