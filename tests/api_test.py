"""
HTTP tests for the v1 router, running on the in-memory backend.
"""
import pytest
from fastapi import status
from fastapi.testclient import TestClient

from app.main import create_app
from domain.exceptions import RepositoryError
from infrastructure.memory import InMemoryDecisionRepository


@pytest.fixture
def repo():
    return InMemoryDecisionRepository()


@pytest.fixture
def client(repo):
    """Test client for a FastAPI app that owns an isolated repository."""
    return TestClient(create_app(decision_repo=repo))


def _put(client, actor_id, recipient_id, liked):
    return client.put("/v1/decisions", json={"actor_id": actor_id, "recipient_id": recipient_id, "liked": liked})


class TestRecordDecisionEndpoint:

    def test_mutual_like_flow(self, client):
        first = _put(client, "alice", "bob", True)
        second = _put(client, "bob", "alice", True)

        assert first.status_code == status.HTTP_200_OK
        assert first.json() == {"mutual": False}
        assert second.json() == {"mutual": True}

    def test_pass_is_not_mutual(self, client):
        _put(client, "bob", "alice", True)

        assert _put(client, "alice", "bob", False).json() == {"mutual": False}

    def test_blank_identifier_is_invalid_argument(self, client):
        response = _put(client, "   ", "bob", True)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["error"] == "invalid_argument"

    def test_missing_field_rejected_by_schema(self, client):
        response = client.put("/v1/decisions", json={"actor_id": "alice", "recipient_id": "bob"})

        assert response.status_code == 422


class TestLikedYouEndpoints:

    def test_list_new_and_count(self, client):
        _put(client, "alice", "r", True)
        _put(client, "r", "alice", True)
        _put(client, "bob", "r", True)
        _put(client, "carol", "r", False)

        liked = client.get("/v1/liked-you/r").json()
        new = client.get("/v1/liked-you/r/new").json()
        count = client.get("/v1/liked-you/r/count").json()

        assert {l["actor_id"] for l in liked["likers"]} == {"alice", "bob"}
        assert liked["next_pagination_token"] == ""
        assert [l["actor_id"] for l in new["likers"]] == ["bob"]
        assert all(l["unix_timestamp"] > 0 for l in liked["likers"])
        assert count == {"count": 2}

    def test_pagination_token_round_trip(self, client):
        for i in range(21):
            _put(client, f"actor{i}", "r", True)

        first = client.get("/v1/liked-you/r", params={"pagination_token": ""}).json()
        second = client.get("/v1/liked-you/r", params={"pagination_token": first["next_pagination_token"]}).json()

        assert len(first["likers"]) == 20
        assert first["next_pagination_token"] == "20"
        assert len(second["likers"]) == 1
        assert second["next_pagination_token"] == ""

    def test_malformed_token_is_client_error(self, client):
        response = client.get("/v1/liked-you/r", params={"pagination_token": "not-a-number"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == {
            "error": "invalid_argument",
            "message": "invalid pagination token: 'not-a-number'",
        }

    @pytest.mark.parametrize("token", ["9" * 20, "9" * 5000])
    def test_oversized_token_is_client_error(self, client, token):
        response = client.get("/v1/liked-you/r/new", params={"pagination_token": token})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["error"] == "invalid_argument"
        assert len(response.json()["detail"]["message"]) < 100

    def test_largest_offset_is_an_empty_page(self, client):
        _put(client, "alice", "r", True)

        response = client.get("/v1/liked-you/r", params={"pagination_token": str(2**63 - 1)})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"likers": [], "next_pagination_token": ""}

    def test_repository_failure_hides_internal_detail(self, repo, client, mocker):
        cause = Exception("SELECT COUNT(*) FROM decisions -- connection reset")
        error = RepositoryError("failed to count liked decisions")
        error.__cause__ = cause
        mocker.patch.object(repo, "count_likers", side_effect=error)

        response = client.get("/v1/liked-you/r/count")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["detail"]["error"] == "repository_error"
        assert "SELECT" not in response.text


class TestDecisionEndpoints:

    def test_get_decision(self, client):
        _put(client, "alice", "bob", True)

        response = client.get("/v1/decisions/alice/bob")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["actor_id"] == "alice"
        assert body["recipient_id"] == "bob"
        assert body["liked"] is True

    def test_get_missing_decision_is_404(self, client):
        response = client.get("/v1/decisions/alice/bob")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"]["error"] == "not_found"

    def test_delete_then_delete_again(self, client):
        _put(client, "alice", "bob", True)

        deleted = client.delete("/v1/decisions/alice/bob")
        missing = client.delete("/v1/decisions/alice/bob")

        assert deleted.status_code == status.HTTP_200_OK
        assert deleted.json() == {"success": True, "message": "Decision deleted successfully"}
        assert missing.status_code == status.HTTP_404_NOT_FOUND
        assert missing.json() == {"success": False, "message": "Decision not found"}

    def test_list_decisions_for_actor(self, client):
        _put(client, "alice", "bob", True)
        _put(client, "alice", "carol", False)
        _put(client, "dave", "alice", True)

        response = client.get("/v1/decisions", params={"actor_id": "alice"})

        assert response.status_code == status.HTTP_200_OK
        assert {d["recipient_id"] for d in response.json()} == {"bob", "carol"}

    def test_list_decisions_limit_out_of_range(self, client):
        response = client.get("/v1/decisions", params={"actor_id": "alice", "limit": 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_health(client):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"


def test_each_app_gets_its_own_memory_repository(monkeypatch):
    from domain.config import reload_config

    monkeypatch.setenv("DECISION_BACKEND", "memory")
    reload_config()
    try:
        first = TestClient(create_app())
        second = TestClient(create_app())
        _put(first, "alice", "bob", True)

        assert first.get("/v1/liked-you/bob/count").json() == {"count": 1}
        assert second.get("/v1/liked-you/bob/count").json() == {"count": 0}
    finally:
        monkeypatch.delenv("DECISION_BACKEND")
        reload_config()


def test_sql_backend_end_to_end(monkeypatch, tmp_path):
    """Full request path through the SQLAlchemy repository on a SQLite file."""
    from domain.config import reload_config

    monkeypatch.setenv("DECISION_BACKEND", "sql")
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'explore.db'}")
    monkeypatch.setenv("DB_CREATE_TABLES", "true")
    reload_config()
    try:
        # the context manager runs the lifespan, which creates the table
        with TestClient(create_app()) as client:
            assert _put(client, "alice", "bob", True).json() == {"mutual": False}
            assert _put(client, "bob", "alice", True).json() == {"mutual": True}
            assert _put(client, "carol", "bob", True).json() == {"mutual": False}

            assert client.get("/v1/liked-you/bob/count").json() == {"count": 2}
            new = client.get("/v1/liked-you/bob/new").json()
            assert [l["actor_id"] for l in new["likers"]] == ["carol"]
            assert client.delete("/v1/decisions/carol/bob").json()["success"] is True
            assert client.get("/v1/decisions/carol/bob").status_code == status.HTTP_404_NOT_FOUND
            oversized = client.get("/v1/liked-you/bob", params={"pagination_token": "9" * 20})
            assert oversized.status_code == status.HTTP_400_BAD_REQUEST
            assert oversized.json()["detail"]["error"] == "invalid_argument"
    finally:
        monkeypatch.undo()
        reload_config()
