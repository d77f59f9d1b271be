"""
Main FastAPI application for Eventboard.
Handles application startup, middleware, and routing.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import config
from .db.database import DatabaseConnection
from .db.redis_client import RedisConnection, CacheManager, NullCacheManager
from .api.routes.router import router as api_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the database and cache clients on startup and releases them on
    shutdown.
    """
    logger.info("Starting Eventboard...")

    db = DatabaseConnection()
    redis_connection = None

    try:
        db_config = await config.get_database_config()
        db.initialize(await config.get_database_url(), db_config)
        if db_config["create_tables"]:
            db.create_tables()
        app.state.db = db
        logger.info("Database connection ready")

        cache_config = await config.get_cache_config()
        if cache_config["enabled"]:
            redis_connection = RedisConnection()
            redis_connection.initialize(await config.get_redis_url())
            app.state.cache_manager = CacheManager(redis_connection.redis_client, cache_config)
            logger.info("Redis cache ready")
        else:
            app.state.cache_manager = NullCacheManager()
            logger.info("Caching disabled")
        app.state.redis = redis_connection

        app.state.cookie_config = await config.get_cookie_config()

        logger.info("Eventboard started successfully")

    except Exception as e:
        logger.error(f"Failed to start Eventboard: {e}")
        raise

    yield

    logger.info("Shutting down Eventboard...")

    try:
        if redis_connection is not None:
            await redis_connection.close()
        db.close()
        await config.close()
        logger.info("Eventboard shut down successfully")

    except Exception as e:
        logger.error(f"Error during shutdown: {e}")


app = FastAPI(
    title="Eventboard",
    description="Events discovery API with anonymous interest tracking and ratings",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add request processing time to response headers."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


def _error_body(error_code: str, message: str) -> dict:
    return {
        "error": message,
        "error_code": error_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def describe_validation_error(exc: RequestValidationError) -> str:
    """Turn the first validation error into a short client-facing message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    loc = first.get("loc") or ()
    field = next((part for part in reversed(loc) if isinstance(part, str)), None)

    if first.get("type") == "missing":
        if field in (None, "body"):
            return "Request body is required"
        return f"{field} is required"
    if field == "event_id":
        return "Invalid event id"
    if field in (None, "body"):
        return "Invalid request body"
    return f"Invalid {field}"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map request validation failures to 400."""
    message = describe_validation_error(exc)
    logger.warning(f"Validation error on {request.url.path}: {message}")
    return JSONResponse(status_code=400, content=_error_body("VALIDATION_ERROR", message))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """HTTP exception handler for FastAPI HTTP exceptions."""
    logger.warning(f"HTTP exception: {exc.status_code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=_error_body("INTERNAL_SERVER_ERROR", "Internal server error")
    )


app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint with service information."""
    return {
        "service": "Eventboard",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "api": "/api",
            "health": "/api/health",
            "docs": "/docs",
        }
    }


@app.get("/health")
async def simple_health_check():
    """Simple health check endpoint."""
    return {"status": "healthy", "service": "eventboard"}
