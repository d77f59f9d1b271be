"""
Dependency injection for Eventboard.
Provides database sessions, services, caching and the anonymous identity.
"""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Generator, Union

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from ..db.database import DatabaseConnection
from ..db.redis_client import CacheManager, NullCacheManager
from ..db.repositories import EventRepository
from ..services.discovery_service import DiscoveryService
from ..services.interest_service import InterestLedger
from ..services.rating_service import RatingService

DEFAULT_COOKIE_CONFIG: Dict[str, Any] = {
    "name": "visitorId",
    "legacy_name": "userId",
    "max_age": 60 * 60 * 24 * 365,
    "secure": False,
}


@dataclass(frozen=True)
class AnonymousIdentity:
    """
    Cookie-held visitor identifier. Not authenticated: any client can
    present any value.
    """
    visitor_id: str
    is_new: bool = False


def get_database(request: Request) -> DatabaseConnection:
    """Get the database connection created at startup."""
    return request.app.state.db


def get_database_session(db: DatabaseConnection = Depends(get_database)) -> Generator[Session, None, None]:
    """
    Get database session dependency.

    Yields:
        SQLAlchemy database session
    """
    yield from db.get_session()


def get_event_repository(session: Session = Depends(get_database_session)) -> EventRepository:
    """Get event repository dependency."""
    return EventRepository(session)


def get_interest_ledger(session: Session = Depends(get_database_session)) -> InterestLedger:
    """Get interest ledger dependency."""
    return InterestLedger(session)


def get_rating_service(session: Session = Depends(get_database_session)) -> RatingService:
    """Get rating service dependency."""
    return RatingService(session)


def get_discovery_service(session: Session = Depends(get_database_session)) -> DiscoveryService:
    """Get discovery service dependency."""
    return DiscoveryService(session)


async def get_cache_manager(request: Request) -> Union[CacheManager, NullCacheManager]:
    """
    Get cache manager dependency.

    Returns:
        The cache manager created at startup, or a no-op one
    """
    return getattr(request.app.state, "cache_manager", None) or NullCacheManager()


def get_anonymous_identity(request: Request, response: Response) -> AnonymousIdentity:
    """
    Resolve the visitor identity from cookies, issuing a new one if absent.

    Args:
        request: FastAPI request object
        response: Response the cookie is set on

    Returns:
        The visitor's anonymous identity
    """
    cookie_config = getattr(request.app.state, "cookie_config", None) or DEFAULT_COOKIE_CONFIG

    visitor_id = request.cookies.get(cookie_config["name"]) or request.cookies.get(cookie_config["legacy_name"])
    if visitor_id:
        return AnonymousIdentity(visitor_id=visitor_id)

    visitor_id = str(uuid.uuid4())
    response.set_cookie(
        key=cookie_config["name"],
        value=visitor_id,
        max_age=cookie_config["max_age"],
        httponly=True,
        samesite="lax",
        secure=cookie_config["secure"],
    )
    return AnonymousIdentity(visitor_id=visitor_id, is_new=True)
