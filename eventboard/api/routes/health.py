"""
Health endpoint reporting database and cache status.
"""

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(request: Request):
    """Check the database and, when enabled, the cache."""
    db = getattr(request.app.state, "db", None)
    redis_connection = getattr(request.app.state, "redis", None)

    database_ok = db.health_check() if db is not None else False
    cache_status = "disabled"
    if redis_connection is not None:
        cache_status = "healthy" if await redis_connection.health_check() else "unhealthy"

    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "healthy" if database_ok else "unhealthy",
        "cache": cache_status,
    }
