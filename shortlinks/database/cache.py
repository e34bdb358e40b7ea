"""Redis cache of which resource kind owns an identifier."""

import logging
from typing import Optional

import redis.asyncio as redis

from .models import ResourceKind
from ..identifiers import IdentifierKey, NumericId


class KindHintCache:
    """Redis cache mapping identifiers to the resource kind that owns them.

    Records are never deleted and identifiers are unique across kinds, so a
    hint stays correct for as long as it lives. Counters are never cached.
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
            ttl_seconds: Default TTL for cached hints
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

        if redis_url:
            self.logger.info(f"Redis kind-hint cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis."""
        if not self.enabled:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except Exception as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    @staticmethod
    def get_cache_key(key: IdentifierKey) -> str:
        """Cache key for a classified identifier.

        Numeric ids and aliases live in separate key spaces.
        """
        if isinstance(key, NumericId):
            return f"shortlinks:kind:id:{key.value}"
        return f"shortlinks:kind:alias:{key.value}"

    async def get_kind(self, key: IdentifierKey) -> Optional[ResourceKind]:
        """Get the cached owner kind of an identifier."""
        if not self.enabled or not self.client:
            return None

        try:
            value = await self.client.get(self.get_cache_key(key))
        except Exception as e:
            self.logger.error(f"Cache get error: {e}")
            return None

        if value is None:
            return None
        try:
            return ResourceKind(value)
        except ValueError:
            self.logger.warning(f"Ignoring unknown kind hint {value!r}")
            return None

    async def set_kind(
        self,
        key: IdentifierKey,
        kind: ResourceKind,
        ttl: Optional[int] = None,
    ) -> bool:
        """Remember which kind owns an identifier.

        Returns:
            True if successful
        """
        if not self.enabled or not self.client:
            return False

        try:
            await self.client.setex(self.get_cache_key(key), ttl or self.ttl_seconds, kind.value)
            return True
        except Exception as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        """Check Redis connectivity; True when caching is disabled."""
        if not self.enabled or not self.client:
            return True
        try:
            await self.client.ping()
            return True
        except Exception as e:
            self.logger.error(f"Cache ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")
