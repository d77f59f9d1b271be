"""
Event rating endpoints for Eventboard.
One 1-5 star rating per visitor per event.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ...schemas.rating import (
    RatingCreate,
    RatingSavedResponse,
    MyRatingResponse,
    RatingSummaryResponse,
    RatingListResponse,
)
from ...services.rating_service import RatingService, parse_rating_value, DEFAULT_PAGE_SIZE
from ..dependencies import AnonymousIdentity, get_anonymous_identity, get_rating_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events/{event_id}/ratings", tags=["Ratings"])


def _server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="server error"
    )


@router.post("", response_model=RatingSavedResponse, status_code=status.HTTP_201_CREATED)
async def save_rating(
    event_id: int,
    payload: RatingCreate,
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    ratings: RatingService = Depends(get_rating_service)
):
    """
    Save the current visitor's rating, replacing any earlier one.

    Raises:
        HTTPException: If the rating is not 1..5 or the event does not exist
    """
    rating = parse_rating_value(payload.rating)
    if rating is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="rating must be 1..5"
        )

    try:
        if not ratings.event_exists(event_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found"
            )
        feedback_id = ratings.save_rating(event_id, identity.visitor_id, rating, payload.comment)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Ratings upsert error for event {event_id}: {e}")
        raise _server_error()

    return {"message": "Saved", "feedback_id": feedback_id}


@router.get("/me", response_model=Optional[MyRatingResponse])
async def get_my_rating(
    event_id: int,
    response: Response,
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    ratings: RatingService = Depends(get_rating_service)
):
    """Get the current visitor's rating, 204 when there is none."""
    try:
        mine = ratings.get_visitor_rating(event_id, identity.visitor_id)
    except Exception as e:
        logger.error(f"ratings/me error for event {event_id}: {e}")
        raise _server_error()

    if mine is None:
        response.status_code = status.HTTP_204_NO_CONTENT
        return None
    return mine


@router.get("/summary", response_model=RatingSummaryResponse)
async def get_rating_summary(
    event_id: int,
    ratings: RatingService = Depends(get_rating_service)
):
    """Average, count and histogram of an event's ratings."""
    try:
        return ratings.get_summary(event_id)
    except Exception as e:
        logger.error(f"ratings/summary error for event {event_id}: {e}")
        raise _server_error()


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_rating(
    event_id: int,
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    ratings: RatingService = Depends(get_rating_service)
):
    """Delete the current visitor's rating. Always 204."""
    try:
        ratings.delete_visitor_rating(event_id, identity.visitor_id)
    except Exception as e:
        logger.error(f"Ratings delete error for event {event_id}: {e}")
        raise _server_error()


@router.get("/all", response_model=RatingListResponse)
async def list_ratings(
    event_id: int,
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Page size, capped at 200"),
    offset: int = Query(0, description="Number of ratings to skip"),
    ratings: RatingService = Depends(get_rating_service)
):
    """List an event's ratings, newest first."""
    try:
        return ratings.list_ratings(event_id, limit=limit, offset=offset)
    except Exception as e:
        logger.error(f"ratings/all error for event {event_id}: {e}")
        raise _server_error()
