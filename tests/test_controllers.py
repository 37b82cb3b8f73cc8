import pytest

from courseven.core.auth import StaticTokenProvider
from courseven.core.config import Settings
from courseven.core.events import ActivityChangedEvent, EnrollmentJoinedEvent, MembershipJoinedEvent
from courseven.core.exceptions import MissingAccessToken
from courseven.schemas import AssessmentCreate
from courseven.wiring import build_services


@pytest.fixture
def current_user():
    return {"id": "s1"}


@pytest.fixture
def services(gateway, current_user):
    built = build_services(
        Settings(table_backend="local", database_url="sqlite://"),
        get_access_token=StaticTokenProvider("tok"),
        get_current_user_id=lambda: current_user["id"],
        gateway=gateway,
    )
    yield built
    built.dispose()


@pytest.fixture
def repos(services):
    return services.repositories


@pytest.fixture
def events(services):
    received = []
    services.event_bus.subscribe(received.append)
    return received


class TestMembershipController:
    def test_join_updates_snapshot_and_publishes(self, services, seed, events):
        course = seed.course()
        group = seed.group(seed.category(course, grouping_method="manual"))
        notifications = []
        services.memberships.subscribe(lambda: notifications.append(services.memberships.snapshot))

        membership = services.memberships.join_group(group.id)

        snapshot = services.memberships.snapshot
        assert membership is not None
        assert snapshot.my_group_ids == (group.id,)
        assert snapshot.group_member_counts == {group.id: 1}
        assert snapshot.is_loading is False
        assert snapshot.error is None
        assert services.memberships.has_joined(group.id)
        assert events == [MembershipJoinedEvent(group_id=group.id, course_id=course.id)]
        assert notifications[0].is_loading is True

    def test_rule_violation_is_stored_as_error(self, services, seed, events):
        course = seed.course()
        group = seed.group(seed.category(course, grouping_method="random"))
        before = services.memberships.snapshot

        assert services.memberships.join_group(group.id) is None

        assert services.memberships.snapshot.error == "Groups in this category are assigned automatically"
        assert before.error is None
        assert events == []

        services.memberships.clear_error()
        assert services.memberships.snapshot.error is None

    def test_anonymous_user(self, services, current_user):
        current_user["id"] = None
        assert services.memberships.join_group("g1") is None
        assert services.memberships.snapshot.error == "User is not authenticated"

    def test_listener_errors_are_logged(self, services, seed, caplog):
        def broken():
            raise RuntimeError("ui bug")

        services.memberships.subscribe(broken)
        services.memberships.load_member_counts(["g1"])

        assert services.memberships.snapshot.group_member_counts == {"g1": 0}
        assert "state listener failed" in caplog.text


class TestEnrollmentController:
    def test_join_by_code(self, services, seed, events):
        course = seed.course(join_code="ABC123")

        enrollment = services.enrollments.join_by_code("ABC123")

        assert enrollment.course_id == course.id
        assert services.enrollments.snapshot.enrollments == (enrollment,)
        assert events == [EnrollmentJoinedEvent(course_id=course.id)]

    def test_invalid_code(self, services):
        assert services.enrollments.join_by_code("NOPE00") is None
        assert services.enrollments.snapshot.error == "Invalid join code or inactive course"

    def test_load_is_throttled(self, services, seed):
        course = seed.course()
        services.enrollments.load_my_enrollments()
        seed.enrollment(course, "s1")

        services.enrollments.load_my_enrollments()
        assert services.enrollments.snapshot.enrollments == ()

        services.enrollments.load_my_enrollments(force=True)
        assert [e.course_id for e in services.enrollments.snapshot.enrollments] == [course.id]


class TestPeerReviewController:
    def test_summary_reload_after_submission(self, services, seed, events):
        course = seed.course()
        category = seed.category(course, grouping_method="manual")
        activity = seed.activity(category)
        seed.assessment(activity_id=activity.id, reviewer_id="s2", student_id="s1", scores=(4, 5, 3, 4))

        services.peer_reviews.load_activity_summary(activity.id)
        assert services.peer_reviews.snapshot.activity_summaries[activity.id].activity_averages.overall == 4.0

        seed.assessment(activity_id=activity.id, reviewer_id="s3", student_id="s1", scores=(2, 2, 2, 2))
        services.peer_reviews.load_activity_summary(activity.id)
        assert services.peer_reviews.snapshot.activity_summaries[activity.id].activity_averages.overall == 4.0

        submitted = services.peer_reviews.submit_assessment(
            AssessmentCreate(
                activity_id=activity.id,
                reviewer_id="s4",
                student_id="s1",
                punctuality_score=3,
                contributions_score=3,
                commitment_score=3,
                attitude_score=3,
            )
        )
        assert submitted is not None
        assert events == [ActivityChangedEvent(course_id=course.id)]

        services.peer_reviews.load_activity_summary(activity.id)
        assert services.peer_reviews.snapshot.activity_summaries[activity.id].activity_averages.overall == 3.0

    def test_course_summary_invalidated_by_membership_event(self, services, seed):
        course = seed.course()
        category = seed.category(course, grouping_method="manual")
        activity = seed.activity(category)

        services.peer_reviews.load_course_summary(course.id)
        assert services.peer_reviews.snapshot.course_summaries[course.id].students == []

        seed.assessment(activity_id=activity.id, reviewer_id="s2", student_id="s1", group_id="g1")
        services.event_bus.publish(MembershipJoinedEvent(group_id="g1", course_id=course.id))
        services.peer_reviews.load_course_summary(course.id)

        students = services.peer_reviews.snapshot.course_summaries[course.id].students
        assert [s.student_id for s in students] == ["s1"]

    def test_duplicate_submission_error(self, services):
        payload = AssessmentCreate(
            activity_id="a1",
            reviewer_id="s1",
            student_id="s2",
            punctuality_score=4,
            contributions_score=4,
            commitment_score=4,
            attitude_score=4,
        )
        assert services.peer_reviews.submit_assessment(payload) is not None
        assert services.peer_reviews.submit_assessment(payload) is None
        assert "already reviewed" in services.peer_reviews.snapshot.error


class TestBuildServices:
    def test_remote_backend_falls_back_to_readonly_account(self):
        services = build_services(
            Settings(table_backend="remote", readonly_email=None, readonly_password=None),
            get_current_user_id=lambda: None,
        )
        try:
            with pytest.raises(MissingAccessToken, match="Read-only credentials"):
                services.repositories.courses.get_courses_by_teacher("t1")
        finally:
            services.dispose()
            services.gateway.close()
