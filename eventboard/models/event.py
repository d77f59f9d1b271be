"""
Event, photo and category models for Eventboard.
Column names follow the hosted database schema.
"""

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Event(Base):
    """
    Event model representing a listed event.
    Rows are managed outside the application; only interested_count is
    written here.
    """
    __tablename__ = "events"

    event_id = Column(Integer, primary_key=True, index=True)
    event_title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=True, index=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    interested_count = Column(Integer, nullable=False, default=0, server_default="0")

    event_photos = relationship(
        "EventPhoto",
        back_populates="event",
        order_by="EventPhoto.photo_id",
        cascade="all, delete-orphan",
    )
    categories = relationship(
        "Category",
        secondary="event_categories",
        order_by="Category.category_id",
        viewonly=True,
    )

    def __repr__(self):
        return f"<Event(event_id={self.event_id}, event_title='{self.event_title}')>"


class EventPhoto(Base):
    """Photo attached to an event."""
    __tablename__ = "event_photos"

    photo_id = Column(Integer, primary_key=True)
    event_id = Column(Integer, ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False, index=True)
    photo_url = Column(Text, nullable=False)

    event = relationship("Event", back_populates="event_photos")


class Category(Base):
    """Event category."""
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True)
    category_name = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<Category(category_id={self.category_id}, category_name='{self.category_name}')>"


class EventCategory(Base):
    """Event to category mapping."""
    __tablename__ = "event_categories"

    event_id = Column(Integer, ForeignKey("events.event_id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), primary_key=True)
