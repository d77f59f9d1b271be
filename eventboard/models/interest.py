"""
Anonymous interest models: per-event interest records and saved categories.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint

from .event import Base


class InterestedEvent(Base):
    """
    Interest record for a (visitor, event) pair.
    The events.interested_count column is the denormalized count of these rows.
    """
    __tablename__ = "interested_events"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_interested_events_user_event"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    event_id = Column(Integer, ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False, index=True)

    def __repr__(self):
        return f"<InterestedEvent(user_id='{self.user_id}', event_id={self.event_id})>"


class InterestedCategory(Base):
    """Category saved by a visitor for recommendations."""
    __tablename__ = "interested_category"
    __table_args__ = (
        UniqueConstraint("user_id", "category_id", name="uq_interested_category_user_category"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), nullable=False)
