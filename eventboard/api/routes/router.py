"""
API router for Eventboard.
"""

from fastapi import APIRouter

from .discovery import router as discovery_router
from .events import router as events_router
from .interests import router as interests_router
from .ratings import router as ratings_router
from .health import router as health_router

router = APIRouter(prefix="/api")

# discovery first: /events/discover and /events/recommended must not reach /events/{event_id}
router.include_router(discovery_router)
router.include_router(events_router)
router.include_router(interests_router)
router.include_router(ratings_router)
router.include_router(health_router)
