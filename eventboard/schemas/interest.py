"""
Pydantic schemas for the interest ledger endpoints.
"""

from typing import Optional
from pydantic import BaseModel


class InterestRequest(BaseModel):
    """Body of POST/DELETE /api/interested."""
    event_id: Optional[int] = None


class InterestResponse(BaseModel):
    message: str
    interested_count: int


class InterestStatusResponse(BaseModel):
    event_id: int
    interested: bool


class InterestCountResponse(BaseModel):
    event_id: int
    interested_count: int
