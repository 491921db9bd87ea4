"""Redis JSON cache for admin read models.

Redis is optional. Without it every read is a miss, writes are dropped and
callers fall through to the database.
"""

import json
from typing import Any, Awaitable, Callable, Optional

import redis.asyncio as aioredis

from zenith.core.config import settings
from zenith.core.logging import get_logger

logger = get_logger(__name__)

DASHBOARD_STATS_KEY = "admin:dashboard:stats"


class CacheService:
    """Async Redis cache that never raises to its callers."""

    def __init__(self):
        self._redis: Optional[aioredis.Redis] = None

    @property
    def available(self) -> bool:
        return self._redis is not None

    async def connect(self) -> None:
        """Connect and ping. A failure leaves the cache disabled."""
        client = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )
        try:
            await client.ping()
        except Exception as e:
            logger.warning(f"Redis cache unavailable, caching disabled: {e}")
            await client.aclose()
            return
        self._redis = client
        logger.info("Redis cache connected")

    async def disconnect(self) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.aclose()
            logger.info("Redis cache disconnected")
        except Exception as e:
            logger.warning(f"Error disconnecting Redis: {e}")
        finally:
            self._redis = None

    async def get(self, key: str) -> Optional[Any]:
        """Decoded value, or None on a miss or any Redis error."""
        if self._redis is None:
            return None
        try:
            data = await self._redis.get(key)
        except Exception as e:
            logger.debug(f"Cache get error for '{key}': {e}")
            return None
        return json.loads(data) if data is not None else None

    async def set(self, key: str, value: Any, ttl: int = settings.CACHE_TTL) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.set(key, json.dumps(value, default=str), ex=ttl)
        except Exception as e:
            logger.debug(f"Cache set error for '{key}': {e}")

    async def delete(self, key: str) -> None:
        if self._redis is None:
            return
        try:
            await self._redis.delete(key)
        except Exception as e:
            logger.debug(f"Cache delete error for '{key}': {e}")

    async def get_or_set(
        self,
        key: str,
        loader: Callable[[], Awaitable[Any]],
        ttl: int = settings.CACHE_TTL
    ) -> Any:
        """Return the cached value, computing and storing it on a miss."""
        cached = await self.get(key)
        if cached is not None:
            return cached
        value = await loader()
        await self.set(key, value, ttl=ttl)
        return value

    async def invalidate_dashboard(self) -> None:
        """Drop cached dashboard counts after a write that changes them."""
        await self.delete(DASHBOARD_STATS_KEY)


cache = CacheService()
