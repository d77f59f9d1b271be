"""
Tests for the interest ledger endpoints.
"""

from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError

from eventboard.main import app
from eventboard.api.dependencies import get_cache_manager, get_interest_ledger
from eventboard.models.interest import InterestedEvent


class TestMarkInterested:
    """Test cases for POST /api/interested."""

    def test_creates_record_and_increments(self, client, make_event):
        event = make_event(interested_count=3)
        client.cookies.set("visitorId", "test-user")

        response = client.post("/api/interested", json={"event_id": event.event_id})

        assert response.status_code == 201
        body = response.json()
        assert "marked as interested" in body["message"]
        assert body["interested_count"] == 4

    def test_second_call_returns_unchanged_count(self, client, db_session, make_event):
        """Test marking twice keeps one record and repeats the count."""
        event = make_event(interested_count=8)
        client.cookies.set("visitorId", "test-user")

        first = client.post("/api/interested", json={"event_id": event.event_id})
        second = client.post("/api/interested", json={"event_id": event.event_id})

        assert first.status_code == 201
        assert second.status_code == 200
        assert second.json() == {"message": "Already marked as interested", "interested_count": 9}
        assert first.json()["interested_count"] == second.json()["interested_count"]
        assert db_session.query(InterestedEvent).filter_by(
            user_id="test-user", event_id=event.event_id
        ).count() == 1

    def test_legacy_user_id_cookie_is_honoured(self, client, db_session, make_event):
        event = make_event()
        client.cookies.set("userId", "legacy-user")

        response = client.post("/api/interested", json={"event_id": event.event_id})

        assert response.status_code == 201
        assert db_session.query(InterestedEvent).filter_by(user_id="legacy-user").count() == 1

    def test_issues_identity_cookie(self, client, make_event):
        """Test a first-time visitor gets an httpOnly identity cookie."""
        event = make_event()

        response = client.post("/api/interested", json={"event_id": event.event_id})

        assert response.status_code == 201
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("visitorId=")
        assert "HttpOnly" in set_cookie
        assert "Max-Age=31536000" in set_cookie
        assert "samesite=lax" in set_cookie.lower()

    def test_missing_event_id(self, client):
        response = client.post("/api/interested", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "event_id is required"

    def test_non_numeric_event_id(self, client):
        response = client.post("/api/interested", json={"event_id": "abc"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid event id"

    def test_missing_body(self, client):
        response = client.post("/api/interested")

        assert response.status_code == 400

    def test_unknown_event(self, client):
        response = client.post("/api/interested", json={"event_id": 999})

        assert response.status_code == 404

    def test_ledger_failure_is_500(self, client):
        ledger = MagicMock()
        ledger.mark_interested.side_effect = OperationalError("INSERT", {}, Exception("boom"))
        app.dependency_overrides[get_interest_ledger] = lambda: ledger

        response = client.post("/api/interested", json={"event_id": 5})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to mark event as interested"

    def test_invalidates_cache(self, client, make_event):
        event = make_event()
        cache_manager = AsyncMock()
        app.dependency_overrides[get_cache_manager] = lambda: cache_manager

        client.post("/api/interested", json={"event_id": event.event_id})

        cache_manager.invalidate_event_cache.assert_awaited_once_with(event.event_id)


class TestRemoveInterest:
    """Test cases for DELETE /api/interested."""

    def test_removes_and_decrements(self, client, make_event):
        event = make_event(interested_count=5)
        client.cookies.set("visitorId", "test-user")
        client.post("/api/interested", json={"event_id": event.event_id})

        response = client.request("DELETE", "/api/interested", json={"event_id": event.event_id})

        assert response.status_code == 200
        assert response.json() == {
            "message": "Event removed from interested list",
            "interested_count": 5,
        }

    def test_without_record_floors_at_zero(self, client, make_event):
        event = make_event(interested_count=0)
        client.cookies.set("visitorId", "test-user")

        response = client.request("DELETE", "/api/interested", json={"event_id": event.event_id})

        assert response.status_code == 200
        assert response.json()["interested_count"] == 0

    def test_missing_event_id(self, client):
        response = client.request("DELETE", "/api/interested", json={})

        assert response.status_code == 400

    def test_ledger_failure_is_500(self, client):
        ledger = MagicMock()
        ledger.remove_interest.side_effect = OperationalError("DELETE", {}, Exception("boom"))
        app.dependency_overrides[get_interest_ledger] = lambda: ledger

        response = client.request("DELETE", "/api/interested", json={"event_id": 9})

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to remove event"


class TestInterestedStatus:
    """Test cases for GET /api/interested/status/{event_id}."""

    def test_reports_true_when_record_exists(self, client, make_event):
        event = make_event()
        client.cookies.set("visitorId", "test-user")
        client.post("/api/interested", json={"event_id": event.event_id})

        response = client.get(f"/api/interested/status/{event.event_id}")

        assert response.status_code == 200
        assert response.json() == {"event_id": event.event_id, "interested": True}

    def test_reports_false_for_other_visitor(self, client, make_event):
        event = make_event()
        client.cookies.set("visitorId", "test-user")
        client.post("/api/interested", json={"event_id": event.event_id})
        client.cookies.set("visitorId", "someone-else")

        response = client.get(f"/api/interested/status/{event.event_id}")

        assert response.json()["interested"] is False

    def test_invalid_event_id(self, client):
        assert client.get("/api/interested/status/abc").status_code == 400

    def test_count_endpoint_matches_ledger(self, client, make_event):
        """Test the stored count follows the ledger across visitors."""
        event = make_event()
        for visitor in ("a", "b", "c"):
            client.cookies.set("visitorId", visitor)
            client.post("/api/interested", json={"event_id": event.event_id})
        client.cookies.set("visitorId", "b")
        client.request("DELETE", "/api/interested", json={"event_id": event.event_id})

        response = client.get(f"/api/events/{event.event_id}/interested_counts")

        assert response.json()["interested_count"] == 2
