"""Redis cache for the redirect path."""

import logging
from typing import Any, Awaitable, Callable, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

KEY_PREFIX = "url:expander:"


class RedisCache:
    """Maps expanded URLs to original URLs with a TTL.

    The cache is advisory. A Redis failure is logged and treated as a
    miss, so the link store stays the source of truth.
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: Lifetime of a cached redirect
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

    @staticmethod
    def key_for(expanded_url: str) -> str:
        return f"{KEY_PREFIX}{expanded_url}"

    async def connect(self) -> None:
        """Connect to Redis; disables the cache if the server is unreachable."""
        if not self.enabled:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info(f"Connected to Redis (TTL={self.ttl_seconds}s)")
        except (RedisError, OSError) as e:
            self.logger.error(f"Failed to connect to Redis, caching disabled: {e}")
            self.enabled = False

    async def _guarded(self, action: str, call: Callable[[], Awaitable[Any]], default: Any) -> Any:
        if not self.enabled or self.client is None:
            return default

        try:
            return await call()
        except (RedisError, OSError) as e:
            self.logger.error(f"Cache {action} failed: {e}")
            return default

    async def get_original(self, expanded_url: str) -> Optional[str]:
        """Cached original URL for an expanded URL, or None on a miss."""
        return await self._guarded(
            "get", lambda: self.client.get(self.key_for(expanded_url)), None
        )

    async def remember(self, expanded_url: str, original_url: str) -> bool:
        """Cache a resolved redirect for ``ttl_seconds``."""
        return await self._guarded(
            "set",
            lambda: self.client.setex(self.key_for(expanded_url), self.ttl_seconds, original_url),
            False,
        )

    async def forget(self, expanded_url: str) -> bool:
        """Drop a superseded expanded URL so it stops redirecting.

        Returns:
            True if an entry was removed
        """
        removed = await self._guarded(
            "delete", lambda: self.client.delete(self.key_for(expanded_url)), 0
        )
        return bool(removed)

    async def ping(self) -> bool:
        """Check the Redis connection."""
        return bool(await self._guarded("ping", lambda: self.client.ping(), False))

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client is not None:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
