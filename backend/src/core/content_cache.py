"""Caching of third-party country content for reduced upstream load."""
import json
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from core.redis import RedisClient

logger = logging.getLogger(__name__)

# Cache schema version - included in all cache keys (e.g., "content:v1:countries").
#
# Bump this version when the cached payload shapes change so entries written by
# the previous release are never read back; they expire naturally via TTL.
CACHE_SCHEMA_VERSION = 1


class ContentCache:
    """
    JSON cache for country lists and per-country third-party content.

    Backed by Redis; a cache miss is indistinguishable from Redis being
    unavailable, so callers always fall through to the upstream fetch.
    """

    def __init__(self, redis_client: "RedisClient") -> None:
        """Initialize content cache with Redis client."""
        self._redis = redis_client

    @staticmethod
    def key(namespace: str, *parts: str) -> str:
        """Build a versioned cache key, e.g. content:v1:wikipedia:japan."""
        suffix = ":".join(part.lower() for part in parts)
        if suffix:
            return f"content:v{CACHE_SCHEMA_VERSION}:{namespace}:{suffix}"
        return f"content:v{CACHE_SCHEMA_VERSION}:{namespace}"

    async def get_json(self, key: str) -> Any | None:
        """Return the decoded cached value, or None on a miss or undecodable entry."""
        data = await self._redis.get(key)
        if data is None:
            logger.debug("content_cache_miss key=%s", key)
            return None
        try:
            value = json.loads(data)
        except ValueError:
            logger.warning("content_cache_corrupt key=%s", key)
            await self._redis.delete(key)
            return None
        logger.debug("content_cache_hit key=%s", key)
        return value

    async def set_json(self, key: str, value: Any, ttl: int) -> None:
        """Store a JSON-serializable value with an expiry in seconds."""
        await self._redis.setex(key, ttl, json.dumps(value))
        logger.debug("content_cache_set key=%s ttl=%s", key, ttl)


# Global content cache instance (set during app startup)
class _CacheState:
    """Container for global content cache state."""

    cache: ContentCache | None = None


_state = _CacheState()


def get_content_cache() -> ContentCache | None:
    """Get the global content cache instance."""
    return _state.cache


def set_content_cache(cache: ContentCache | None) -> None:
    """Set the global content cache instance."""
    _state.cache = cache
