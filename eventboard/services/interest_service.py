"""
Interest ledger: keeps events.interested_count in step with interest records.
The record write and the counter update commit in one transaction, and the
counter is adjusted by a single UPDATE so concurrent requests cannot lose
increments.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..db.repositories import EventRepository, InterestRepository

logger = logging.getLogger(__name__)


class InterestLedger:
    """
    Mark/remove interest for anonymous visitors.
    """

    def __init__(self, session: Session):
        self.session = session
        self.events = EventRepository(session)
        self.interests = InterestRepository(session)

    def is_interested(self, user_id: str, event_id: int) -> bool:
        """Check whether the visitor has an interest record for the event."""
        return self.interests.exists(user_id, event_id)

    def get_interested_count(self, event_id: int) -> Optional[int]:
        """Get the stored count, None if the event does not exist."""
        return self.events.get_interested_count(event_id)

    def mark_interested(self, user_id: str, event_id: int) -> Optional[Tuple[int, bool]]:
        """
        Record interest of a visitor in an event.

        Args:
            user_id: Anonymous visitor identifier
            event_id: Event ID

        Returns:
            Tuple of (interested_count, created) or None if the event
            does not exist. created is False when the visitor was already
            interested; the count is then returned unchanged.
        """
        try:
            current = self.events.get_interested_count(event_id)
            if current is None:
                return None

            if self.interests.exists(user_id, event_id):
                return current, False

            self.interests.add(user_id, event_id)
            self.events.increment_interested_count(event_id)
            new_count = self.events.get_interested_count(event_id)
            self.session.commit()

        except IntegrityError:
            # Lost the race against a concurrent request for the same pair
            self.session.rollback()
            logger.info(f"Interest of {user_id} in event {event_id} already recorded")
            return self.events.get_interested_count(event_id) or 0, False
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Visitor {user_id} marked event {event_id} as interested ({new_count})")
        return new_count, True

    def remove_interest(self, user_id: str, event_id: int) -> Optional[int]:
        """
        Remove a visitor's interest in an event.

        The record is deleted if present and the count is decremented with a
        floor of zero in either case.

        Returns:
            The new interested_count, or None if the event does not exist.
        """
        try:
            if not self.events.exists(event_id):
                return None

            removed = self.interests.remove(user_id, event_id)
            self.events.decrement_interested_count(event_id)
            new_count = self.events.get_interested_count(event_id)
            self.session.commit()

        except Exception:
            self.session.rollback()
            raise

        if not removed:
            logger.warning(f"Visitor {user_id} had no interest record for event {event_id}")
        logger.info(f"Visitor {user_id} removed interest in event {event_id} ({new_count})")
        return new_count
