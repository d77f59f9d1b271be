"""
Interest ledger endpoints for Eventboard.
Visitors are identified by the anonymous identity cookie.
"""

import logging
from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ...db.redis_client import CacheManager, NullCacheManager
from ...schemas.interest import InterestRequest, InterestResponse, InterestStatusResponse
from ...services.interest_service import InterestLedger
from ..dependencies import AnonymousIdentity, get_anonymous_identity, get_cache_manager, get_interest_ledger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/interested", tags=["Interested"])


def _require_event_id(payload: InterestRequest) -> int:
    if not payload.event_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="event_id is required"
        )
    return payload.event_id


@router.post("", response_model=InterestResponse)
async def mark_interested(
    payload: InterestRequest,
    response: Response,
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    ledger: InterestLedger = Depends(get_interest_ledger),
    cache_manager: Union[CacheManager, NullCacheManager] = Depends(get_cache_manager)
):
    """
    Mark an event as interested for the current visitor.

    Returns 201 with the incremented count when a record is created, or 200
    with the unchanged count when the visitor was already interested.
    """
    event_id = _require_event_id(payload)

    try:
        result = ledger.mark_interested(identity.visitor_id, event_id)
    except Exception as e:
        logger.error(f"Failed to mark interested: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to mark event as interested"
        )

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )

    interested_count, created = result
    if not created:
        return {"message": "Already marked as interested", "interested_count": interested_count}

    await cache_manager.invalidate_event_cache(event_id)
    response.status_code = status.HTTP_201_CREATED
    return {
        "message": f"Event {event_id} marked as interested",
        "interested_count": interested_count,
    }


@router.delete("", response_model=InterestResponse)
async def remove_interest(
    payload: InterestRequest,
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    ledger: InterestLedger = Depends(get_interest_ledger),
    cache_manager: Union[CacheManager, NullCacheManager] = Depends(get_cache_manager)
):
    """Remove the current visitor's interest and decrement the count."""
    event_id = _require_event_id(payload)

    try:
        interested_count = ledger.remove_interest(identity.visitor_id, event_id)
    except Exception as e:
        logger.error(f"Failed to remove interest: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove event"
        )

    if interested_count is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )

    await cache_manager.invalidate_event_cache(event_id)
    return {"message": "Event removed from interested list", "interested_count": interested_count}


@router.get("/status/{event_id}", response_model=InterestStatusResponse)
async def get_interested_status(
    event_id: int,
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    ledger: InterestLedger = Depends(get_interest_ledger)
):
    """Check whether the current visitor is interested in an event."""
    try:
        interested = ledger.is_interested(identity.visitor_id, event_id)
    except Exception as e:
        logger.error(f"Failed to fetch interested status: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch interested status"
        )

    return {"event_id": event_id, "interested": interested}
