"""
Pydantic schemas for event and category responses.
"""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from ..services.status import EventPhase


class CategoryResponse(BaseModel):
    """Category schema."""
    category_id: int
    category_name: str

    class Config:
        from_attributes = True


class PhotoResponse(BaseModel):
    """Event photo schema."""
    photo_url: str

    class Config:
        from_attributes = True


class EventBase(BaseModel):
    """Base event schema."""
    event_id: int
    event_title: str
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    interested_count: int = 0

    class Config:
        from_attributes = True


class EventSummaryResponse(EventBase):
    """Event list item with its categories."""
    categories: List[CategoryResponse] = Field(default_factory=list)


class EventDetailResponse(EventBase):
    """Single event with its photos."""
    event_photos: List[PhotoResponse] = Field(default_factory=list)


class EventStatusResponse(BaseModel):
    """Computed lifecycle phase."""
    event_id: int
    status: EventPhase


class EventPhotosResponse(BaseModel):
    photos: List[str]


class EventListResponse(BaseModel):
    """Discovery result."""
    items: List[EventSummaryResponse]
    total: int


class UserCategoriesResponse(BaseModel):
    """Categories saved by the current visitor."""
    category_ids: List[int]
    categories: List[CategoryResponse]


class UserCategoriesUpdate(BaseModel):
    """Replace the current visitor's saved categories."""
    category_ids: List[int] = Field(default_factory=list)
