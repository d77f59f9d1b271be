"""
Redis client for Eventboard caching.
"""

import json
import logging
from typing import Any, Optional, Dict
import redis.asyncio as redis
from redis.asyncio import Redis

logger = logging.getLogger(__name__)

EVENTS_LIST_KEY = "events:list:all"


class RedisConnection:
    """
    Redis connection manager for Eventboard.
    Handles caching operations for read-heavy endpoints.
    """

    def __init__(self):
        self.redis_client: Optional[Redis] = None
        self._initialized = False

    def initialize(self, redis_url: str):
        """
        Initialize Redis connection.

        Args:
            redis_url: Redis connection URL
        """
        try:
            self.redis_client = redis.from_url(
                redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                retry_on_timeout=True,
                health_check_interval=30
            )
            self._initialized = True
            logger.info("Redis connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize Redis connection: {e}")
            raise

    async def health_check(self) -> bool:
        """Ping Redis."""
        if not self._initialized:
            return False
        try:
            return bool(await self.redis_client.ping())
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self):
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
            logger.info("Redis connection closed")
        self._initialized = False


class CacheManager:
    """
    Cache manager for Eventboard.
    Cache errors are logged and reported as misses.
    """

    def __init__(self, redis_client: Redis, cache_config: Optional[Dict[str, Any]] = None):
        self.redis = redis_client
        self.cache_config = cache_config or {}

    def _serialize(self, data: Any) -> str:
        """Serialize data for caching."""
        return json.dumps(data, default=str)

    def _deserialize(self, data: str) -> Any:
        """Deserialize cached data."""
        return json.loads(data)

    async def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        try:
            value = await self.redis.get(key)
            if value:
                return self._deserialize(value)
            return None
        except Exception as e:
            logger.error(f"Failed to get cache key {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time to live in seconds

        Returns:
            True if successful
        """
        try:
            serialized_value = self._serialize(value)
            await self.redis.set(key, serialized_value, ex=ttl)
            return True
        except Exception as e:
            logger.error(f"Failed to set cache key {key}: {e}")
            return False

    async def delete(self, *keys: str) -> bool:
        """Delete keys from cache."""
        try:
            await self.redis.delete(*keys)
            return True
        except Exception as e:
            logger.error(f"Failed to delete cache keys {keys}: {e}")
            return False

    def get_event_cache_key(self, event_id: int) -> str:
        """Generate cache key for single event."""
        return f"event:detail:{event_id}"

    async def cache_events_list(self, events: list):
        """Cache events list."""
        ttl = self.cache_config.get("events_ttl", 300)
        await self.set(EVENTS_LIST_KEY, events, ttl)

    async def get_cached_events_list(self) -> Optional[list]:
        """Get cached events list."""
        return await self.get(EVENTS_LIST_KEY)

    async def cache_event_detail(self, event: dict, event_id: int):
        """Cache event detail."""
        ttl = self.cache_config.get("event_details_ttl", 600)
        await self.set(self.get_event_cache_key(event_id), event, ttl)

    async def get_cached_event_detail(self, event_id: int) -> Optional[dict]:
        """Get cached event detail."""
        return await self.get(self.get_event_cache_key(event_id))

    async def invalidate_event_cache(self, event_id: int):
        """Invalidate the detail entry for an event and the events list."""
        await self.delete(self.get_event_cache_key(event_id), EVENTS_LIST_KEY)


class NullCacheManager:
    """Cache manager used when caching is disabled. Every lookup misses."""

    async def get_cached_events_list(self) -> Optional[list]:
        return None

    async def cache_events_list(self, events: list):
        return None

    async def get_cached_event_detail(self, event_id: int) -> Optional[dict]:
        return None

    async def cache_event_detail(self, event: dict, event_id: int):
        return None

    async def invalidate_event_cache(self, event_id: int):
        return None
