import pytest
from fastapi.testclient import TestClient

from courseven.core.config import Settings
from courseven.core.exceptions import GatewayTimeout, TableGatewayError
from courseven.main import create_app

AUTH = {"Authorization": "Bearer test-token"}


@pytest.fixture
def settings():
    return Settings(table_backend="local", database_url="sqlite://", max_courses_per_teacher=3)


@pytest.fixture
def client(settings, gateway):
    return TestClient(create_app(settings=settings, gateway=gateway))


def create_course(client, teacher_id="teacher-1", name="Mobile Development"):
    response = client.post("/api/v1/courses", json={"teacher_id": teacher_id, "name": name}, headers=AUTH)
    assert response.status_code == 201, response.text
    return response.json()


def create_category(client, course_id, **overrides):
    body = {"teacher_id": "teacher-1", "course_id": course_id, "name": "Teams", "grouping_method": "random"}
    body.update(overrides)
    response = client.post("/api/v1/categories", json=body, headers=AUTH)
    assert response.status_code == 201, response.text
    return response.json()


def enroll(client, user_id, join_code):
    return client.post("/api/v1/enrollments", json={"user_id": user_id, "join_code": join_code}, headers=AUTH)


class FailingGateway:
    def __init__(self, error):
        self.error = error

    def read(self, table, query=None, *, access_token):
        raise self.error

    def insert(self, table, records, *, access_token):
        raise self.error

    def update(self, table, id_value, updates, *, access_token, id_column="_id"):
        raise self.error


class TestHealthAndAuth:
    def test_health(self, client):
        assert client.get("/api/v1/health").json() == {"status": "ok"}

    def test_missing_bearer_token(self, client):
        response = client.get("/api/v1/courses", params={"teacher_id": "teacher-1"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Access token not available"

    def test_non_bearer_scheme(self, client):
        response = client.get(
            "/api/v1/courses", params={"teacher_id": "teacher-1"}, headers={"Authorization": "Basic abc"}
        )
        assert response.status_code == 401


class TestCourseEndpoints:
    def test_create_list_and_toggle(self, client):
        course = create_course(client)
        assert len(course["join_code"]) == 6

        listed = client.get("/api/v1/courses", params={"teacher_id": "teacher-1"}, headers=AUTH).json()
        assert [c["id"] for c in listed] == [course["id"]]

        response = client.patch(
            f"/api/v1/courses/{course['id']}/active",
            json={"teacher_id": "teacher-1", "is_active": False},
            headers=AUTH,
        )
        assert response.status_code == 200
        assert response.json()["is_active"] is False

    def test_limit_of_active_courses(self, client):
        for name in ("A", "B", "C"):
            create_course(client, name=name)

        response = client.post("/api/v1/courses", json={"teacher_id": "teacher-1", "name": "D"}, headers=AUTH)

        assert response.status_code == 400
        assert "at most 3 active courses" in response.json()["detail"]

    def test_delete_by_other_teacher(self, client):
        course = create_course(client)
        response = client.delete(
            f"/api/v1/courses/{course['id']}", params={"teacher_id": "someone-else"}, headers=AUTH
        )
        assert response.status_code == 403


class TestEnrollmentAndGroups:
    def test_random_category_flow(self, client):
        course = create_course(client)
        category = create_category(client, course["id"], max_members_per_group=2)
        for student in ("s1", "s2", "s3"):
            assert enroll(client, student, course["join_code"]).status_code == 201

        first = client.post(
            "/api/v1/groups",
            json={"teacher_id": "teacher-1", "category_id": category["id"], "name": "G1"},
            headers=AUTH,
        ).json()
        second = client.post(
            "/api/v1/groups",
            json={"teacher_id": "teacher-1", "category_id": category["id"], "name": "G2"},
            headers=AUTH,
        ).json()

        assert [m["user_id"] for m in first["assigned"]] == ["s1", "s2"]
        assert [m["user_id"] for m in second["assigned"]] == ["s3"]
        assert first["group"]["course_id"] == course["id"]

        response = enroll(client, "s4", course["join_code"])
        assert response.status_code == 201
        groups = client.get(f"/api/v1/categories/{category['id']}/groups", headers=AUTH).json()
        assert [g["name"] for g in groups] == ["G1", "G2"]

    def test_enrollment_errors(self, client):
        course = create_course(client)
        assert enroll(client, "s1", course["join_code"]).status_code == 201

        assert enroll(client, "s1", course["join_code"]).status_code == 409
        assert enroll(client, "s1", "XXXXXX").status_code == 404
        assert enroll(client, "teacher-1", course["join_code"]).status_code == 400

    def test_manual_join_rejects_second_group_in_category(self, client):
        course = create_course(client)
        category = create_category(client, course["id"], name="Project teams", grouping_method="manual")
        group_ids = []
        for name in ("G1", "G2"):
            created = client.post(
                "/api/v1/groups",
                json={"teacher_id": "teacher-1", "category_id": category["id"], "name": name},
                headers=AUTH,
            ).json()
            group_ids.append(created["group"]["id"])

        joined = client.post(f"/api/v1/groups/{group_ids[0]}/members", json={"user_id": "s1"}, headers=AUTH)
        rejected = client.post(f"/api/v1/groups/{group_ids[1]}/members", json={"user_id": "s1"}, headers=AUTH)

        assert joined.status_code == 201
        assert rejected.status_code == 409
        assert '"Project teams"' in rejected.json()["detail"]

    def test_invalid_grouping_method_is_422(self, client):
        course = create_course(client)
        response = client.post(
            "/api/v1/categories",
            json={"teacher_id": "teacher-1", "course_id": course["id"], "name": "X", "grouping_method": "alpha"},
            headers=AUTH,
        )
        assert response.status_code == 422


class TestPeerReviewEndpoints:
    def test_submit_and_summaries(self, client, seed):
        course = seed.course(teacher_id="teacher-1")
        category = seed.category(course, grouping_method="manual")
        activity = seed.activity(category)
        body = {
            "activity_id": activity.id,
            "group_id": "g1",
            "reviewer_id": "s2",
            "student_id": "s1",
            "punctuality_score": 4,
            "contributions_score": 5,
            "commitment_score": 3,
            "attitude_score": 4,
        }

        created = client.post("/api/v1/assessments", json=body, headers=AUTH)
        duplicate = client.post("/api/v1/assessments", json=body, headers=AUTH)
        second = client.post(
            "/api/v1/assessments",
            json={**body, "reviewer_id": "s3", "punctuality_score": 2, "contributions_score": 3,
                  "commitment_score": 2, "attitude_score": 2},
            headers=AUTH,
        )

        assert created.status_code == 201
        assert created.json()["overall_score"] == 4.0
        assert duplicate.status_code == 409
        assert second.status_code == 201

        summary = client.get(f"/api/v1/activities/{activity.id}/peer-review", headers=AUTH).json()
        assert summary["activity_averages"]["punctuality"] == 3.0
        assert summary["activity_averages"]["overall"] == 3.13
        assert summary["groups"][0]["students"][0]["received_count"] == 2

        course_summary = client.get(f"/api/v1/courses/{course.id}/peer-review", headers=AUTH).json()
        assert course_summary["students"][0]["assessments_received"] == 2
        assert course_summary["groups"][0]["group_id"] == "g1"

        pending = client.get(
            f"/api/v1/activities/{activity.id}/groups/g1/pending-reviews",
            params={"reviewer_id": "s2"},
            headers=AUTH,
        )
        assert pending.json() == []

    def test_out_of_range_score_is_422(self, client):
        body = {
            "activity_id": "a1",
            "reviewer_id": "s2",
            "student_id": "s1",
            "punctuality_score": 1,
            "contributions_score": 5,
            "commitment_score": 3,
            "attitude_score": 4,
        }
        assert client.post("/api/v1/assessments", json=body, headers=AUTH).status_code == 422

    def test_self_review_is_400(self, client):
        body = {
            "activity_id": "a1",
            "reviewer_id": "s1",
            "student_id": "s1",
            "punctuality_score": 4,
            "contributions_score": 4,
            "commitment_score": 4,
            "attitude_score": 4,
        }
        assert client.post("/api/v1/assessments", json=body, headers=AUTH).status_code == 400


class TestTableStoreFailures:
    def test_store_error_is_502(self, settings):
        gateway = FailingGateway(TableGatewayError("courses", 503, "maintenance"))
        client = TestClient(create_app(settings=settings, gateway=gateway))

        response = client.get("/api/v1/courses", params={"teacher_id": "teacher-1"}, headers=AUTH)

        assert response.status_code == 502
        assert response.json()["detail"] == "Database error (courses) - status 503: maintenance"

    def test_timeout_is_504(self, settings):
        gateway = FailingGateway(GatewayTimeout("courses", detail="request timed out"))
        client = TestClient(create_app(settings=settings, gateway=gateway))

        response = client.get("/api/v1/courses", params={"teacher_id": "teacher-1"}, headers=AUTH)

        assert response.status_code == 504


class TestActivityEndpoints:
    def create_activity(self, client, category_id, **overrides):
        body = {"teacher_id": "teacher-1", "category_id": category_id, "title": "Sprint 1"}
        body.update(overrides)
        response = client.post("/api/v1/activities", json=body, headers=AUTH)
        assert response.status_code == 201, response.text
        return response.json()

    def review(self, client, activity_id, reviewer_id, scores):
        punctuality, contributions, commitment, attitude = scores
        body = {
            "activity_id": activity_id,
            "group_id": "g1",
            "reviewer_id": reviewer_id,
            "student_id": "s1",
            "punctuality_score": punctuality,
            "contributions_score": contributions,
            "commitment_score": commitment,
            "attitude_score": attitude,
        }
        assert client.post("/api/v1/assessments", json=body, headers=AUTH).status_code == 201

    def test_teacher_drives_the_review_window(self, client):
        course = create_course(client)
        category = create_category(client, course["id"], grouping_method="manual")
        activity = self.create_activity(client, category["id"])
        assert activity["course_id"] == course["id"]
        assert activity["reviewing"] is False

        opened = client.patch(
            f"/api/v1/activities/{activity['id']}/reviewing",
            json={"teacher_id": "teacher-1", "reviewing": True},
            headers=AUTH,
        )
        renamed = client.patch(
            f"/api/v1/activities/{activity['id']}",
            json={"teacher_id": "teacher-1", "title": "Sprint one"},
            headers=AUTH,
        )

        assert opened.json()["reviewing"] is True
        assert renamed.json()["title"] == "Sprint one"
        assert renamed.json()["reviewing"] is True
        listed = client.get(f"/api/v1/courses/{course['id']}/activities", headers=AUTH).json()
        assert [a["id"] for a in listed] == [activity["id"]]

        self.review(client, activity["id"], "s2", (4, 5, 3, 4))
        summary = client.get(f"/api/v1/courses/{course['id']}/peer-review", headers=AUTH).json()
        assert summary["students"][0]["student_id"] == "s1"

    def test_student_results_hide_private_activities(self, client):
        course = create_course(client)
        category = create_category(client, course["id"], grouping_method="manual")
        public = self.create_activity(client, category["id"], title="Public", reviewing=True)
        private = self.create_activity(client, category["id"], title="Private", reviewing=True)
        self.review(client, public["id"], "s2", (4, 5, 3, 4))
        self.review(client, private["id"], "s2", (2, 2, 2, 2))
        client.patch(
            f"/api/v1/activities/{private['id']}/reviewing",
            json={"teacher_id": "teacher-1", "reviewing": False, "private_review": True},
            headers=AUTH,
        )

        course_results = client.get(
            f"/api/v1/courses/{course['id']}/students/s1/peer-review", headers=AUTH
        ).json()
        activity_results = client.get(
            f"/api/v1/activities/{private['id']}/students/s1/results", headers=AUTH
        ).json()

        assert course_results["activity_ids"] == [public["id"]]
        assert course_results["assessments_received"] == 1
        assert course_results["averages"]["overall"] == 4.0
        assert activity_results["assessments_received"] == 1
        assert activity_results["received"][0]["reviewer_id"] == "s2"

    def test_other_teacher_cannot_change_or_delete(self, client):
        course = create_course(client)
        category = create_category(client, course["id"], grouping_method="manual")
        activity = self.create_activity(client, category["id"])

        patched = client.patch(
            f"/api/v1/activities/{activity['id']}/reviewing",
            json={"teacher_id": "someone-else", "reviewing": True},
            headers=AUTH,
        )
        deleted = client.delete(
            f"/api/v1/activities/{activity['id']}", params={"teacher_id": "someone-else"}, headers=AUTH
        )

        assert patched.status_code == 403
        assert deleted.status_code == 403

    def test_delete_hides_the_activity(self, client):
        course = create_course(client)
        category = create_category(client, course["id"], grouping_method="manual")
        activity = self.create_activity(client, category["id"])

        response = client.delete(
            f"/api/v1/activities/{activity['id']}", params={"teacher_id": "teacher-1"}, headers=AUTH
        )

        assert response.status_code == 204
        assert client.get(f"/api/v1/courses/{course['id']}/activities", headers=AUTH).json() == []
        missing = client.patch(
            f"/api/v1/activities/{activity['id']}",
            json={"teacher_id": "teacher-1", "title": "Back"},
            headers=AUTH,
        )
        assert missing.status_code == 404
