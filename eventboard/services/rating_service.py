"""
Star ratings stored as JSON documents inside feedback.text_content.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..db.repositories import EventRepository, FeedbackRepository
from ..models.feedback import Feedback

logger = logging.getLogger(__name__)

RATING_VALUES = (1, 2, 3, 4, 5)
RATING_TYPE = "rating"
MAX_PAGE_SIZE = 200
DEFAULT_PAGE_SIZE = 50


def parse_rating_value(value: Any) -> Optional[int]:
    """Coerce a submitted rating to an int in 1..5, None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not number.is_integer():
        return None
    rating = int(number)
    return rating if rating in RATING_VALUES else None


def parse_rating_row(row: Feedback) -> Optional[Dict[str, Any]]:
    """Decode a feedback row into a rating dict, None if it is not a rating."""
    try:
        payload = json.loads(row.text_content or "")
    except (TypeError, ValueError):
        return None
    if not isinstance(payload, dict) or payload.get("type") != RATING_TYPE:
        return None

    rating = parse_rating_value(payload.get("rating"))
    if rating is None:
        return None

    return {
        "feedback_id": row.feedback_id,
        "event_id": row.event_id,
        "rating": rating,
        "comment": payload.get("comment"),
        "visitor": payload.get("visitor"),
        "created_at": row.created_at,
    }


def _sort_key(item: Dict[str, Any]) -> datetime:
    created_at = item["created_at"]
    if created_at is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if created_at.tzinfo is None:
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


class RatingService:
    """
    One rating per visitor per event; a new rating replaces the old one.
    """

    def __init__(self, session: Session):
        self.session = session
        self.events = EventRepository(session)
        self.feedback = FeedbackRepository(session)

    def event_exists(self, event_id: int) -> bool:
        return self.events.exists(event_id)

    def _ratings(self, event_id: int) -> List[Dict[str, Any]]:
        ratings = [parse_rating_row(row) for row in self.feedback.get_for_event(event_id)]
        return sorted((r for r in ratings if r), key=_sort_key, reverse=True)

    def _visitor_ratings(self, event_id: int, visitor_id: str) -> List[Dict[str, Any]]:
        return [r for r in self._ratings(event_id) if r["visitor"] == visitor_id]

    def save_rating(self, event_id: int, visitor_id: str, rating: int, comment: Optional[str] = None) -> str:
        """
        Store a visitor's rating, replacing any earlier one.

        Returns:
            The new feedback_id
        """
        payload = {
            "type": RATING_TYPE,
            "visitor": visitor_id,
            "rating": rating,
            "comment": comment,
        }
        try:
            previous = self._visitor_ratings(event_id, visitor_id)
            self.feedback.delete_ids(r["feedback_id"] for r in previous)
            row = self.feedback.add(event_id, json.dumps(payload))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Saved rating {rating} for event {event_id} from {visitor_id}")
        return row.feedback_id

    def get_visitor_rating(self, event_id: int, visitor_id: str) -> Optional[Dict[str, Any]]:
        """Get the visitor's newest rating for an event."""
        mine = self._visitor_ratings(event_id, visitor_id)
        if not mine:
            return None
        latest = mine[0]
        return {
            "rating": latest["rating"],
            "comment": latest["comment"],
            "created_at": latest["created_at"],
        }

    def delete_visitor_rating(self, event_id: int, visitor_id: str) -> int:
        """Delete all of the visitor's ratings for an event."""
        try:
            deleted = self.feedback.delete_ids(
                r["feedback_id"] for r in self._visitor_ratings(event_id, visitor_id)
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return deleted

    def get_summary(self, event_id: int) -> Dict[str, Any]:
        """Average, count and per-star histogram of an event's ratings."""
        ratings = self._ratings(event_id)
        histogram = {str(value): 0 for value in RATING_VALUES}
        total = 0
        for item in ratings:
            histogram[str(item["rating"])] += 1
            total += item["rating"]

        count = len(ratings)
        average = round(total / count, 2) if count else None
        return {"average": average, "count": count, "histogram": histogram}

    def list_ratings(self, event_id: int, limit: int = DEFAULT_PAGE_SIZE, offset: int = 0) -> Dict[str, Any]:
        """Page through an event's ratings, newest first."""
        limit = max(min(limit, MAX_PAGE_SIZE), 0)
        offset = max(offset, 0)
        ratings = self._ratings(event_id)
        return {
            "total": len(ratings),
            "items": ratings[offset:offset + limit],
        }
