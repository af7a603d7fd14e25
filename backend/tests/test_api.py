"""HTTP tests for the weekly credit scoring API."""
import pytest
from fastapi.testclient import TestClient

from main import app

OWNER = {"X-Actor-Id": "u-owner"}
LEAD_A = {"X-Actor-Id": "u-lead-a"}
MEMBER = {"X-Actor-Id": "u-ana"}

FULL_WEEK = {"hours_worked": 40, "key_results": [{"score": 1, "weight": 1}], "collaboration": 0.8}


@pytest.fixture
def client(directory):
    with TestClient(app) as c:
        yield c


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


def test_health_reports_resolver_cache(client):
    client.get("/api/credit/weights/t-alpha")
    cache = client.get("/health").json()["resolver_cache"]
    assert set(cache) == {"size", "ttl_seconds", "hits", "misses"}
    assert cache["size"] >= 1


def test_default_weights(client):
    response = client.get("/api/credit/weights/t-alpha")
    assert response.status_code == 200
    body = response.json()
    assert (body["EC"], body["OC"], body["CC"]) == (40, 50, 10)
    assert body["is_default"] is True


def test_save_weights(client):
    response = client.put("/api/credit/weights/t-alpha", json={"ec": 30, "oc": 60, "cc": 10}, headers=LEAD_A)
    assert response.status_code == 200
    assert response.json()["is_default"] is False
    assert response.json()["updated_by"] == "u-lead-a"

    assert client.get("/api/credit/weights/t-alpha").json()["OC"] == 60


def test_save_weights_bad_sum_is_400(client):
    response = client.put("/api/credit/weights/t-alpha", json={"ec": 50, "oc": 50, "cc": 10}, headers=OWNER)
    assert response.status_code == 400
    assert response.json()["error"] == "validation"
    assert "110" in response.json()["detail"]


def test_save_weights_wrong_lead_is_403(client):
    response = client.put("/api/credit/weights/t-beta", json={"ec": 40, "oc": 50, "cc": 10}, headers=LEAD_A)
    assert response.status_code == 403
    assert response.json()["error"] == "permission"


def test_missing_actor_is_401(client):
    response = client.put("/api/credit/weights/t-alpha", json={"ec": 40, "oc": 50, "cc": 10})
    assert response.status_code == 401


def test_unknown_actor_is_401(client):
    response = client.put(
        "/api/credit/weights/t-alpha", json={"ec": 40, "oc": 50, "cc": 10}, headers={"X-Actor-Id": "u-ghost"}
    )
    assert response.status_code == 401


def test_rating_roundtrip(client):
    assert client.get("/api/credit/ratings/u-ana").json()["multiplier"] == 1.0

    response = client.put("/api/credit/ratings/u-ana", json={"multiplier": 1.2, "notes": "Great"}, headers=LEAD_A)
    assert response.status_code == 200

    body = client.get("/api/credit/ratings/u-ana").json()
    assert body["multiplier"] == 1.2
    assert body["notes"] == "Great"
    assert body["is_default"] is False


def test_rating_out_of_bounds_is_400(client):
    response = client.put("/api/credit/ratings/u-ana", json={"multiplier": 3}, headers=OWNER)
    assert response.status_code == 400


def test_submit_and_list_scores(client):
    response = client.post("/api/scores/u-ana/weeks/2025-W10", json=FULL_WEEK, headers=LEAD_A)
    assert response.status_code == 200
    body = response.json()
    assert body["breakdown"]["final_score"] == 0.98
    assert body["breakdown"]["check_mark"] is True
    assert body["record"]["wcs"] == 0.98
    assert body["record"]["version"] == 1

    client.post("/api/scores/u-ana/weeks/2025-W11", json=FULL_WEEK, headers=LEAD_A)
    weeks = [r["week_id"] for r in client.get("/api/scores/u-ana").json()]
    assert weeks == ["2025-W11", "2025-W10"]


def test_submit_bad_week_is_400(client):
    response = client.post("/api/scores/u-ana/weeks/2025-10", json=FULL_WEEK, headers=LEAD_A)
    assert response.status_code == 400


def test_submit_week_with_encoded_newline_is_400(client):
    client.post("/api/scores/u-ana/weeks/2025-W07", json=FULL_WEEK, headers=LEAD_A)
    response = client.post("/api/scores/u-ana/weeks/2025-W07%0A", json=FULL_WEEK, headers=LEAD_A)
    assert response.status_code == 400
    assert [r["week_id"] for r in client.get("/api/scores/u-ana").json()] == ["2025-W07"]


def test_list_scores_for_user_without_records_is_empty(client):
    response = client.get("/api/scores/u-nobody")
    assert response.status_code == 200
    assert response.json() == []


def test_submit_unknown_user_is_404(client):
    response = client.post("/api/scores/u-ghost/weeks/2025-W10", json=FULL_WEEK, headers=OWNER)
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_submit_stale_version_is_409(client):
    client.post("/api/scores/u-ana/weeks/2025-W10", json=FULL_WEEK, headers=LEAD_A)
    response = client.post(
        "/api/scores/u-ana/weeks/2025-W10", json={**FULL_WEEK, "expected_version": 0}, headers=LEAD_A
    )
    assert response.status_code == 409
    assert response.json()["error"] == "conflict"


def test_delete_requires_owner_and_is_audited(client):
    client.post("/api/scores/u-ana/weeks/2025-W10", json=FULL_WEEK, headers=LEAD_A)

    assert client.delete("/api/scores/u-ana/weeks/2025-W10", headers=LEAD_A).status_code == 403
    assert client.delete("/api/scores/u-ana/weeks/2025-W10", headers=OWNER).status_code == 204
    assert client.get("/api/scores/u-ana").json() == []
    assert client.delete("/api/scores/u-ana/weeks/2025-W10", headers=OWNER).status_code == 404

    audit = client.get("/api/audit", headers=OWNER).json()
    assert audit["total"] == 1
    assert audit["entries"][0]["details"]["deleted_score"]["WCS"] == 0.98


def test_audit_owner_only(client):
    assert client.get("/api/audit", headers=LEAD_A).status_code == 403


def test_summary_and_trend(client):
    client.post("/api/scores/u-ana/weeks/2025-W10", json=FULL_WEEK, headers=LEAD_A)
    client.post(
        "/api/scores/u-ana/weeks/2025-W11",
        json={"hours_worked": 40, "key_results": [], "collaboration": 0},
        headers=LEAD_A,
    )

    summary = client.get("/api/scores/u-ana/summary").json()
    assert summary["average_wcs"] == 0.69
    assert summary["check_mark_count"] == 1
    assert summary["streak"] == 0

    trend = client.get("/api/scores/u-ana/trend?window=2").json()
    assert [p["week_id"] for p in trend] == ["2025-W10", "2025-W11"]
    assert trend[-1]["rolling_wcs"] == 0.69


def test_empty_summary(client):
    summary = client.get("/api/scores/u-bo/summary").json()
    assert summary["average_wcs"] == 0
    assert summary["check_mark_count"] == 0


def test_quarter_snapshot(client):
    client.post("/api/scores/u-ana/weeks/2025-W10", json=FULL_WEEK, headers=LEAD_A)
    response = client.post("/api/scores/u-ana/quarters/2025/1", json={"assessment": "On track"}, headers=LEAD_A)
    assert response.status_code == 200
    assert response.json()["qs"] == 0.98
    assert response.json()["cumulative_check_marks"] == 1


def test_leaderboard(client):
    client.post("/api/scores/u-ana/weeks/2025-W10", json=FULL_WEEK, headers=LEAD_A)
    client.post(
        "/api/scores/u-bo/weeks/2025-W10",
        json={"hours_worked": 12, "key_results": [{"score": 0.4}], "collaboration": 0.5},
        headers=OWNER,
    )

    board = client.get("/api/leaderboard").json()
    assert [e["user_id"] for e in board] == ["u-ana", "u-bo"]
    assert board[0]["rank"] == 1
    assert board[0]["total_score"] == 113.0

    assert client.get("/api/leaderboard?view=karma").status_code == 400
