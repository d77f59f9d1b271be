"""
Pydantic schemas for event ratings.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class RatingCreate(BaseModel):
    """Rating submission. The rating is range-checked by the route."""
    rating: Any = None
    comment: Optional[str] = None


class RatingSavedResponse(BaseModel):
    message: str
    feedback_id: str


class MyRatingResponse(BaseModel):
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


class RatingItem(BaseModel):
    """Public rating entry. The visitor id is the identity cookie value and is never returned."""
    feedback_id: str
    event_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


class RatingSummaryResponse(BaseModel):
    average: Optional[float] = None
    count: int
    histogram: Dict[str, int]


class RatingListResponse(BaseModel):
    total: int
    items: List[RatingItem]
