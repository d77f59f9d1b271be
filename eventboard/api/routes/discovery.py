"""
Category and discovery endpoints for Eventboard.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...schemas.event import (
    CategoryResponse,
    EventListResponse,
    UserCategoriesResponse,
    UserCategoriesUpdate,
)
from ...services.discovery_service import DiscoveryService, parse_category_filter
from ..dependencies import AnonymousIdentity, get_anonymous_identity, get_discovery_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Discovery"])


def _user_categories_response(categories) -> dict:
    return {
        "category_ids": [c.category_id for c in categories],
        "categories": categories,
    }


def _server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="server error"
    )


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(discovery: DiscoveryService = Depends(get_discovery_service)):
    """List all categories."""
    try:
        return discovery.list_categories()
    except Exception as e:
        logger.error(f"Failed to list categories: {e}")
        raise _server_error()


@router.get("/interests/me", response_model=UserCategoriesResponse)
async def get_my_interests(
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    discovery: DiscoveryService = Depends(get_discovery_service)
):
    """Get the categories saved by the current visitor."""
    try:
        categories = discovery.get_user_categories(identity.visitor_id)
    except Exception as e:
        logger.error(f"Failed to load interests for {identity.visitor_id}: {e}")
        raise _server_error()
    return _user_categories_response(categories)


@router.post("/interests/me", response_model=UserCategoriesResponse)
async def save_my_interests(
    payload: UserCategoriesUpdate,
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    discovery: DiscoveryService = Depends(get_discovery_service)
):
    """Replace the categories saved by the current visitor."""
    try:
        categories = discovery.set_user_categories(identity.visitor_id, payload.category_ids)
    except Exception as e:
        logger.error(f"Failed to save interests for {identity.visitor_id}: {e}")
        raise _server_error()
    return _user_categories_response(categories)


@router.get("/events/discover", response_model=EventListResponse)
async def discover_events(
    categories: Optional[str] = Query(None, description="Comma separated category ids"),
    discovery: DiscoveryService = Depends(get_discovery_service)
):
    """List events tagged with any of the selected categories."""
    category_ids = parse_category_filter(categories)
    if not category_ids:
        return {"items": [], "total": 0}

    try:
        events = discovery.discover(category_ids)
    except Exception as e:
        logger.error(f"Failed to discover events: {e}")
        raise _server_error()
    return {"items": events, "total": len(events)}


@router.get("/events/recommended", response_model=EventListResponse)
async def recommended_events(
    identity: AnonymousIdentity = Depends(get_anonymous_identity),
    discovery: DiscoveryService = Depends(get_discovery_service)
):
    """List events matching the current visitor's saved categories."""
    try:
        events = discovery.recommend(identity.visitor_id)
    except Exception as e:
        logger.error(f"Failed to load recommendations for {identity.visitor_id}: {e}")
        raise _server_error()
    return {"items": events, "total": len(events)}
