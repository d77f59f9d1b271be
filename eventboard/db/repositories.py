"""
Repositories for Eventboard tables.
Write methods flush but never commit; the calling service owns the transaction.
"""

from typing import Iterable, List, Optional

from sqlalchemy import case
from sqlalchemy.orm import Session, selectinload

from ..models.event import Event, EventPhoto, Category, EventCategory
from ..models.interest import InterestedEvent, InterestedCategory
from ..models.feedback import Feedback


class EventRepository:
    """
    Repository for Event model operations.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, event_id: int) -> Optional[Event]:
        """Get event by ID."""
        return self.session.query(Event).filter(Event.event_id == event_id).first()

    def get_with_photos(self, event_id: int) -> Optional[Event]:
        """Get event by ID with its photos loaded."""
        return (
            self.session.query(Event)
            .options(selectinload(Event.event_photos))
            .filter(Event.event_id == event_id)
            .first()
        )

    def get_all(self) -> List[Event]:
        """Get all events with their categories, ordered by start time."""
        return (
            self.session.query(Event)
            .options(selectinload(Event.categories))
            .order_by(Event.start_time.asc(), Event.event_id.asc())
            .all()
        )

    def get_by_category_ids(self, category_ids: Iterable[int]) -> List[Event]:
        """Get events tagged with any of the given categories."""
        ids = list(category_ids)
        if not ids:
            return []
        matching = (
            self.session.query(EventCategory.event_id)
            .filter(EventCategory.category_id.in_(ids))
        )
        return (
            self.session.query(Event)
            .options(selectinload(Event.categories))
            .filter(Event.event_id.in_(matching))
            .order_by(Event.start_time.asc(), Event.event_id.asc())
            .all()
        )

    def exists(self, event_id: int) -> bool:
        return self.session.query(Event.event_id).filter(Event.event_id == event_id).first() is not None

    def get_photo_urls(self, event_id: int) -> List[str]:
        """Get photo URLs for an event."""
        rows = (
            self.session.query(EventPhoto.photo_url)
            .filter(EventPhoto.event_id == event_id)
            .order_by(EventPhoto.photo_id)
            .all()
        )
        return [row.photo_url for row in rows]

    def get_interested_count(self, event_id: int) -> Optional[int]:
        """Read the stored interested count, None if the event does not exist."""
        row = (
            self.session.query(Event.interested_count)
            .filter(Event.event_id == event_id)
            .first()
        )
        if row is None:
            return None
        return int(row.interested_count or 0)

    def increment_interested_count(self, event_id: int) -> int:
        """Atomically add one to interested_count. Returns affected rows."""
        return (
            self.session.query(Event)
            .filter(Event.event_id == event_id)
            .update(
                {Event.interested_count: Event.interested_count + 1},
                synchronize_session=False
            )
        )

    def decrement_interested_count(self, event_id: int) -> int:
        """Atomically subtract one from interested_count, never below zero."""
        return (
            self.session.query(Event)
            .filter(Event.event_id == event_id)
            .update(
                {
                    Event.interested_count: case(
                        (Event.interested_count > 0, Event.interested_count - 1),
                        else_=0
                    )
                },
                synchronize_session=False
            )
        )


class InterestRepository:
    """
    Repository for (visitor, event) interest records.
    """

    def __init__(self, session: Session):
        self.session = session

    def exists(self, user_id: str, event_id: int) -> bool:
        return (
            self.session.query(InterestedEvent.id)
            .filter(InterestedEvent.user_id == user_id, InterestedEvent.event_id == event_id)
            .first()
        ) is not None

    def add(self, user_id: str, event_id: int) -> InterestedEvent:
        """Insert an interest record. Raises IntegrityError on duplicates."""
        record = InterestedEvent(user_id=user_id, event_id=event_id)
        self.session.add(record)
        self.session.flush()
        return record

    def remove(self, user_id: str, event_id: int) -> int:
        """Delete the interest record if present. Returns deleted rows."""
        return (
            self.session.query(InterestedEvent)
            .filter(InterestedEvent.user_id == user_id, InterestedEvent.event_id == event_id)
            .delete(synchronize_session=False)
        )

    def count_for_event(self, event_id: int) -> int:
        return self.session.query(InterestedEvent).filter(InterestedEvent.event_id == event_id).count()


class CategoryRepository:
    """
    Repository for categories and visitors' saved categories.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_all(self) -> List[Category]:
        return self.session.query(Category).order_by(Category.category_id).all()

    def get_by_ids(self, category_ids: Iterable[int]) -> List[Category]:
        ids = list(category_ids)
        if not ids:
            return []
        return (
            self.session.query(Category)
            .filter(Category.category_id.in_(ids))
            .order_by(Category.category_id)
            .all()
        )

    def get_user_categories(self, user_id: str) -> List[Category]:
        """Get the categories a visitor has saved."""
        return (
            self.session.query(Category)
            .join(InterestedCategory, InterestedCategory.category_id == Category.category_id)
            .filter(InterestedCategory.user_id == user_id)
            .order_by(Category.category_id)
            .all()
        )

    def replace_user_categories(self, user_id: str, category_ids: Iterable[int]) -> None:
        """Replace a visitor's saved categories with the given set."""
        self.session.query(InterestedCategory).filter(
            InterestedCategory.user_id == user_id
        ).delete(synchronize_session=False)
        for category_id in sorted(set(category_ids)):
            self.session.add(InterestedCategory(user_id=user_id, category_id=category_id))
        self.session.flush()


class FeedbackRepository:
    """
    Repository for feedback rows.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_for_event(self, event_id: int) -> List[Feedback]:
        """Get feedback rows for an event, newest first."""
        return (
            self.session.query(Feedback)
            .filter(Feedback.event_id == event_id)
            .order_by(Feedback.created_at.desc())
            .all()
        )

    def add(self, event_id: int, text_content: str) -> Feedback:
        row = Feedback(event_id=event_id, text_content=text_content)
        self.session.add(row)
        self.session.flush()
        return row

    def delete_ids(self, feedback_ids: Iterable[str]) -> int:
        ids = list(feedback_ids)
        if not ids:
            return 0
        return (
            self.session.query(Feedback)
            .filter(Feedback.feedback_id.in_(ids))
            .delete(synchronize_session=False)
        )
