"""
Tests for rating storage on top of feedback rows.
"""

import json
from datetime import datetime, timezone

import pytest

from eventboard.models.feedback import Feedback
from eventboard.services.rating_service import RatingService, parse_rating_row, parse_rating_value


class TestParseRatingValue:
    """Test cases for rating coercion."""

    @pytest.mark.parametrize("value,expected", [
        (1, 1), (5, 5), ("3", 3), (4.0, 4), ("2.0", 2),
    ])
    def test_accepts_one_to_five(self, value, expected):
        assert parse_rating_value(value) == expected

    @pytest.mark.parametrize("value", [0, 6, -1, 4.5, "abc", None, True, [], {}])
    def test_rejects_everything_else(self, value):
        assert parse_rating_value(value) is None


class TestParseRatingRow:
    """Test cases for decoding feedback rows."""

    def _row(self, text_content):
        return Feedback(
            feedback_id="f-1",
            event_id=7,
            text_content=text_content,
            created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )

    def test_decodes_rating(self):
        row = self._row(json.dumps({"type": "rating", "visitor": "v", "rating": 4, "comment": "nice"}))

        parsed = parse_rating_row(row)

        assert parsed["rating"] == 4
        assert parsed["comment"] == "nice"
        assert parsed["visitor"] == "v"
        assert parsed["event_id"] == 7

    @pytest.mark.parametrize("text_content", [
        "plain text feedback",
        None,
        json.dumps({"type": "comment", "rating": 4}),
        json.dumps({"type": "rating", "rating": 9}),
        json.dumps([1, 2, 3]),
    ])
    def test_ignores_non_ratings(self, text_content):
        assert parse_rating_row(self._row(text_content)) is None


class TestRatingService:
    """Test cases for RatingService."""

    def test_save_rating_replaces_previous(self, db_session, make_event):
        """Test a visitor keeps a single rating per event."""
        event = make_event()
        service = RatingService(db_session)

        service.save_rating(event.event_id, "visitor-1", 2)
        feedback_id = service.save_rating(event.event_id, "visitor-1", 5, "great")

        mine = service.get_visitor_rating(event.event_id, "visitor-1")
        assert mine["rating"] == 5
        assert mine["comment"] == "great"
        assert db_session.query(Feedback).count() == 1
        assert db_session.query(Feedback).one().feedback_id == feedback_id

    def test_other_visitors_are_untouched(self, db_session, make_event):
        """Test saving does not remove other visitors' ratings."""
        event = make_event()
        service = RatingService(db_session)

        service.save_rating(event.event_id, "visitor-1", 2)
        service.save_rating(event.event_id, "visitor-2", 4)

        assert service.get_summary(event.event_id)["count"] == 2

    def test_summary(self, db_session, make_event):
        """Test average, count and histogram."""
        event = make_event()
        service = RatingService(db_session)
        for visitor, rating in (("a", 5), ("b", 4), ("c", 4)):
            service.save_rating(event.event_id, visitor, rating)
        db_session.add(Feedback(event_id=event.event_id, text_content="not a rating"))
        db_session.commit()

        summary = service.get_summary(event.event_id)

        assert summary["count"] == 3
        assert summary["average"] == 4.33
        assert summary["histogram"] == {"1": 0, "2": 0, "3": 0, "4": 2, "5": 1}

    def test_summary_without_ratings(self, db_session, make_event):
        event = make_event()

        summary = RatingService(db_session).get_summary(event.event_id)

        assert summary == {
            "average": None,
            "count": 0,
            "histogram": {"1": 0, "2": 0, "3": 0, "4": 0, "5": 0},
        }

    def test_delete_visitor_rating(self, db_session, make_event):
        event = make_event()
        service = RatingService(db_session)
        service.save_rating(event.event_id, "visitor-1", 3)

        assert service.delete_visitor_rating(event.event_id, "visitor-1") == 1
        assert service.get_visitor_rating(event.event_id, "visitor-1") is None
        assert service.delete_visitor_rating(event.event_id, "visitor-1") == 0

    def test_list_ratings_pages_newest_first(self, db_session, make_event):
        """Test paging and newest-first ordering."""
        event = make_event()
        for index, rating in enumerate((1, 2, 3, 4, 5)):
            db_session.add(Feedback(
                event_id=event.event_id,
                text_content=json.dumps({"type": "rating", "visitor": f"v{index}", "rating": rating}),
                created_at=datetime(2025, 1, 1 + index, tzinfo=timezone.utc),
            ))
        db_session.commit()
        service = RatingService(db_session)

        page = service.list_ratings(event.event_id, limit=2, offset=1)

        assert page["total"] == 5
        assert [item["rating"] for item in page["items"]] == [4, 3]

    def test_list_ratings_clamps_paging(self, db_session, make_event):
        event = make_event()
        service = RatingService(db_session)
        service.save_rating(event.event_id, "visitor-1", 3)

        page = service.list_ratings(event.event_id, limit=1000, offset=-5)

        assert page["total"] == 1
        assert len(page["items"]) == 1
