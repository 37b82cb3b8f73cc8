import pytest

from courseven.core.exceptions import TableGatewayError


class TestLocalTableGateway:
    def test_insert_generates_id_and_read_filters(self, gateway):
        response = gateway.insert(
            "courses",
            [{"name": "A", "teacher_id": "t1", "join_code": "AAA111"}],
            access_token="tok",
        )

        assert response["skipped"] == []
        inserted = response["inserted"][0]
        assert inserted["_id"]
        assert inserted["is_active"] is True

        rows = gateway.read("courses", {"teacher_id": "t1", "is_active": True}, access_token="tok")
        assert [row["_id"] for row in rows] == [inserted["_id"]]
        assert gateway.read("courses", {"teacher_id": "t2"}, access_token="tok") == []

    def test_unknown_filter_keys_are_ignored(self, gateway):
        gateway.insert("groups", [{"name": "G1", "category_id": "k", "course_id": "c", "teacher_id": "t"}], access_token="tok")

        assert len(gateway.read("groups", {"tableName": "groups", "nonsense": 1}, access_token="tok")) == 1

    def test_constraint_violation_is_skipped_with_reason(self, gateway):
        record = {"user_id": "s1", "course_id": "c1"}
        gateway.insert("enrollments", [record], access_token="tok")

        response = gateway.insert("enrollments", [record], access_token="tok")

        assert response["inserted"] == []
        assert response["skipped"][0]["reason"]

    def test_membership_column_keeps_store_spelling(self, gateway):
        response = gateway.insert(
            "memberships",
            [{"user_id": "s1", "group_id": "g1", "joinet_at": "2025-01-01T00:00:00+00:00"}],
            access_token="tok",
        )

        assert response["inserted"][0]["joinet_at"] == "2025-01-01T00:00:00+00:00"

    def test_update_returns_updated_record(self, gateway):
        inserted = gateway.insert(
            "courses", [{"name": "A", "teacher_id": "t1"}], access_token="tok"
        )["inserted"][0]

        response = gateway.update("courses", inserted["_id"], {"is_active": False}, access_token="tok")

        assert response["updated"][0]["is_active"] is False

    def test_update_missing_record(self, gateway):
        with pytest.raises(TableGatewayError, match="status 404"):
            gateway.update("courses", "missing", {"is_active": False}, access_token="tok")

    def test_unknown_table(self, gateway):
        with pytest.raises(TableGatewayError, match="status 404"):
            gateway.read("nope", access_token="tok")
