"""
Configuration management for Eventboard.
Reads settings from the environment, falling back to the Zero secrets store.
"""

import os
import asyncio
import concurrent.futures
from urllib.parse import quote_plus
from typing import Dict, Any, Optional, List
import logging
from zero_python_sdk import zero

logger = logging.getLogger(__name__)

ONE_YEAR_SECONDS = 60 * 60 * 24 * 365


class ZeroSecretsManager:
    """
    Zero secrets client using the official Zero Python SDK.
    Secrets are fetched once and cached for the life of the process.
    """

    def __init__(self, zero_token: str, caller_name: str = "eventboard"):
        self.zero_token = zero_token
        self.caller_name = caller_name
        self._cache: Dict[str, Any] = {}
        self._secrets = None

    async def _fetch_secrets(self):
        """Fetch secrets from Zero if not already cached."""
        if self._secrets is None:
            try:
                loop = asyncio.get_running_loop()
                with concurrent.futures.ThreadPoolExecutor() as executor:
                    self._secrets = await loop.run_in_executor(
                        executor,
                        lambda: zero(
                            token=self.zero_token,
                            pick=["eventboard"],
                            caller_name=self.caller_name
                        ).fetch()
                    )
                logger.info("Successfully fetched secrets from Zero")
            except Exception as e:
                logger.error(f"Failed to fetch secrets from Zero: {e}")
                self._secrets = {}

    def _normalize_key(self, key: str) -> str:
        """Normalize a key to lowercase and replace underscores with hyphens."""
        return key.lower().replace("_", "-")

    async def get_secret(self, key: str) -> Optional[str]:
        """
        Get a secret value by key.

        Args:
            key: The secret key to retrieve

        Returns:
            Secret value or None if not found
        """
        key = self._normalize_key(key)
        if key in self._cache:
            return self._cache[key]

        await self._fetch_secrets()
        secret_value = (self._secrets or {}).get("eventboard", {}).get(key)

        if secret_value:
            self._cache[key] = secret_value

        return secret_value

    async def close(self):
        """Drop cached secrets."""
        self._cache.clear()
        self._secrets = None


class EventboardConfig:
    """
    Eventboard configuration manager.
    Environment variables win; Zero is consulted only when ZERO_TOKEN is set.
    """

    def __init__(self):
        self.zero_token = os.getenv("ZERO_TOKEN")
        self.secrets_manager: Optional[ZeroSecretsManager] = None
        if self.zero_token:
            self.secrets_manager = ZeroSecretsManager(self.zero_token)

    async def get_secret(self, key: str) -> Optional[str]:
        """Resolve a setting from the environment, then from Zero."""
        value = os.getenv(key)
        if value is not None:
            return value
        if self.secrets_manager is None:
            return None
        return await self.secrets_manager.get_secret(key)

    async def _get_bool(self, key: str, default: bool) -> bool:
        value = await self.get_secret(key)
        if value is None or value == "":
            return default
        return value.strip().lower() in ("1", "true", "yes", "on")

    async def get_database_url(self) -> str:
        """Get the database connection URL."""
        url = await self.get_secret("DATABASE_URL")
        if url:
            return url

        host = await self.get_secret("DB_HOST") or "localhost"
        port = await self.get_secret("DB_PORT") or "5432"
        name = await self.get_secret("DB_NAME") or "postgres"
        user = await self.get_secret("DB_USER") or "postgres"
        password = await self.get_secret("DB_PASSWORD") or "postgres"

        return f"postgresql+psycopg://{user}:{quote_plus(password)}@{host}:{port}/{name}"

    async def get_database_config(self) -> Dict[str, Any]:
        """Get connection pool settings."""
        return {
            "pool_size": int(await self.get_secret("DB_POOL_SIZE") or "5"),
            "max_overflow": int(await self.get_secret("DB_MAX_OVERFLOW") or "10"),
            "pool_timeout": int(await self.get_secret("DB_POOL_TIMEOUT") or "30"),
            "pool_recycle": int(await self.get_secret("DB_POOL_RECYCLE") or "300"),
            "create_tables": await self._get_bool("DB_CREATE_TABLES", False),
        }

    async def get_redis_url(self) -> str:
        """Get the Redis connection URL."""
        url = await self.get_secret("REDIS_URL")
        if url:
            return url

        host = await self.get_secret("REDIS_HOST") or "localhost"
        port = await self.get_secret("REDIS_PORT") or "6379"
        password = await self.get_secret("REDIS_PASSWORD")
        use_tls = await self._get_bool("REDIS_USE_TLS", False)

        protocol = "rediss://" if use_tls else "redis://"

        if password:
            return f"{protocol}:{quote_plus(password)}@{host}:{port}"
        return f"{protocol}{host}:{port}"

    async def get_cache_config(self) -> Dict[str, Any]:
        """Get cache TTL configuration."""
        return {
            "enabled": await self._get_bool("CACHE_ENABLED", True),
            "events_ttl": int(await self.get_secret("CACHE_TTL_EVENTS") or "300"),
            "event_details_ttl": int(await self.get_secret("CACHE_TTL_EVENT_DETAILS") or "600"),
        }

    def get_cors_origins(self) -> List[str]:
        """
        Get CORS allowed origins.
        Read from the environment only, since middleware is built at import time.
        """
        origins = os.getenv("CORS_ORIGINS")
        if origins:
            return [origin.strip() for origin in origins.split(",") if origin.strip()]
        return ["http://localhost:5173", "http://localhost:3000"]

    async def get_cookie_config(self) -> Dict[str, Any]:
        """Get anonymous identity cookie settings."""
        environment = (await self.get_secret("ENVIRONMENT") or "development").lower()
        return {
            "name": await self.get_secret("VISITOR_COOKIE_NAME") or "visitorId",
            "legacy_name": "userId",
            "max_age": int(await self.get_secret("VISITOR_COOKIE_MAX_AGE") or str(ONE_YEAR_SECONDS)),
            "secure": environment == "production",
        }

    async def close(self):
        """Close the secrets manager."""
        if self.secrets_manager is not None:
            await self.secrets_manager.close()


# Global config instance
config = EventboardConfig()
