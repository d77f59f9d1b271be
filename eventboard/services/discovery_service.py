"""
Category-based discovery and recommendations.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from ..db.repositories import CategoryRepository, EventRepository
from ..models.event import Category, Event

logger = logging.getLogger(__name__)


def parse_category_filter(raw: Optional[str]) -> List[int]:
    """Parse a comma separated list of category ids, skipping junk entries."""
    ids = []
    for part in (raw or "").split(","):
        part = part.strip()
        if part.isdigit() and int(part) not in ids:
            ids.append(int(part))
    return ids


class DiscoveryService:
    """
    Lists categories, stores a visitor's saved categories and finds events
    matching them.
    """

    def __init__(self, session: Session):
        self.session = session
        self.events = EventRepository(session)
        self.categories = CategoryRepository(session)

    def list_categories(self) -> List[Category]:
        return self.categories.get_all()

    def get_user_categories(self, user_id: str) -> List[Category]:
        return self.categories.get_user_categories(user_id)

    def set_user_categories(self, user_id: str, category_ids: Iterable[int]) -> List[Category]:
        """
        Replace the visitor's saved categories. Unknown ids are dropped.

        Returns:
            The saved categories
        """
        known = self.categories.get_by_ids(category_ids)
        try:
            self.categories.replace_user_categories(user_id, (c.category_id for c in known))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info(f"Visitor {user_id} saved {len(known)} categories")
        return known

    def discover(self, category_ids: Iterable[int]) -> List[Event]:
        """Events having any of the given categories, by start time."""
        return self.events.get_by_category_ids(category_ids)

    def recommend(self, user_id: str) -> List[Event]:
        """Events matching the visitor's saved categories."""
        saved = [c.category_id for c in self.categories.get_user_categories(user_id)]
        if not saved:
            return []
        return self.events.get_by_category_ids(saved)
