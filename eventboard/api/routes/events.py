"""
Public event endpoints for Eventboard.
"""

import logging
from typing import Any, Dict, List, Union

from fastapi import APIRouter, Depends, HTTPException, status

from ...db.redis_client import CacheManager, NullCacheManager
from ...db.repositories import EventRepository
from ...schemas.event import (
    EventSummaryResponse,
    EventDetailResponse,
    EventStatusResponse,
    EventPhotosResponse,
)
from ...schemas.interest import InterestCountResponse
from ...services.status import compute_event_status
from ..dependencies import get_event_repository, get_cache_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["Events"])

# Single-value getters: URL segment -> events column
EVENT_FIELDS = {
    "title": "event_title",
    "description": "description",
    "location": "location",
    "date": "start_time",
    "start_time": "start_time",
    "end_time": "end_time",
    "interested_count": "interested_count",
}


@router.get("", response_model=List[EventSummaryResponse])
async def list_events(
    event_repo: EventRepository = Depends(get_event_repository),
    cache_manager: Union[CacheManager, NullCacheManager] = Depends(get_cache_manager)
):
    """
    List all events with their categories, ordered by start time.

    Args:
        event_repo: Event repository
        cache_manager: Cache manager

    Returns:
        List of events
    """
    cached_events = await cache_manager.get_cached_events_list()
    if cached_events is not None:
        return cached_events

    try:
        events = event_repo.get_all()
    except Exception as e:
        logger.error(f"Failed to list events: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch events"
        )

    response = [EventSummaryResponse.model_validate(event).model_dump(mode="json") for event in events]
    await cache_manager.cache_events_list(response)
    return response


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event(
    event_id: int,
    event_repo: EventRepository = Depends(get_event_repository),
    cache_manager: Union[CacheManager, NullCacheManager] = Depends(get_cache_manager)
):
    """
    Get event by ID with its photos.

    Raises:
        HTTPException: If event not found
    """
    cached_event = await cache_manager.get_cached_event_detail(event_id)
    if cached_event is not None:
        return cached_event

    try:
        event = event_repo.get_with_photos(event_id)
    except Exception as e:
        logger.error(f"Error fetching event {event_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch event"
        )

    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )

    response = EventDetailResponse.model_validate(event).model_dump(mode="json")
    await cache_manager.cache_event_detail(response, event_id)
    return response


@router.get("/{event_id}/photos", response_model=EventPhotosResponse)
async def get_event_photos(
    event_id: int,
    event_repo: EventRepository = Depends(get_event_repository)
):
    """List photo URLs of an event. Unknown events have no photos."""
    try:
        photos = event_repo.get_photo_urls(event_id)
    except Exception as e:
        logger.error(f"Error fetching photos for event {event_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch photos"
        )
    return {"photos": photos}


@router.get("/{event_id}/status", response_model=EventStatusResponse)
async def get_event_status(
    event_id: int,
    event_repo: EventRepository = Depends(get_event_repository)
):
    """
    Get the computed lifecycle phase (Upcoming/Ongoing/Ended) of an event.

    Raises:
        HTTPException: If event not found
    """
    try:
        event = event_repo.get_by_id(event_id)
    except Exception as e:
        logger.error(f"Failed to fetch status for event {event_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch event status"
        )

    if not event:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )

    return {
        "event_id": event_id,
        "status": compute_event_status(event.start_time, event.end_time),
    }


@router.get("/{event_id}/interested_counts", response_model=InterestCountResponse)
async def get_interested_count(
    event_id: int,
    event_repo: EventRepository = Depends(get_event_repository)
):
    """Get the current interested count of an event."""
    try:
        count = event_repo.get_interested_count(event_id)
    except Exception as e:
        logger.error(f"Failed to fetch interested count for event {event_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch interested count"
        )

    if count is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Event not found"
        )

    return {"event_id": event_id, "interested_count": count}


def _format_field(field: str, value: Any) -> Any:
    if field == "date":
        return value.date().isoformat() if value is not None else None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return value


def _make_field_getter(field: str, column: str):
    async def get_event_field(
        event_id: int,
        event_repo: EventRepository = Depends(get_event_repository)
    ) -> Dict[str, Any]:
        try:
            event = event_repo.get_by_id(event_id)
        except Exception as e:
            logger.error(f"Error fetching {field} for event {event_id}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to fetch {field}"
            )

        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found"
            )

        return {field: _format_field(field, getattr(event, column))}

    get_event_field.__name__ = f"get_event_{field}"
    get_event_field.__doc__ = f"Get the {field} of an event."
    return get_event_field


for _field, _column in EVENT_FIELDS.items():
    router.add_api_route(
        f"/{{event_id}}/{_field}",
        _make_field_getter(_field, _column),
        methods=["GET"],
        name=f"get_event_{_field}",
    )
