"""
Widget Render Cache

Redis-backed cache of rendered widget HTML. Keys carry the instance id and a
revision derived from the instance and definition rows, so a render of an
older row is never returned once a newer row is committed. Failures talking
to Redis are logged and behave as cache misses; rendering never depends on
the cache being reachable.
"""

import logging
from typing import Iterable, Optional

import redis.asyncio as redis

from funnelpress.config import settings

logger = logging.getLogger(__name__)

KEY_PREFIX = "widget:render:"


class RenderCache:
    """Rendered-markup cache keyed by (instance id, revision)."""

    def __init__(
        self,
        redis_url: str = None,
        ttl_seconds: int = None,
        enabled: bool = None,
    ):
        self.redis_url = redis_url or settings.REDIS_URL
        self.ttl_seconds = ttl_seconds or settings.WIDGET_RENDER_CACHE_SECONDS
        self.enabled = settings.WIDGET_RENDER_CACHE_ENABLED if enabled is None else enabled
        self._redis: Optional[redis.Redis] = None

    async def get_redis(self) -> redis.Redis:
        """Get or create Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._redis

    async def close(self):
        """Close Redis connection."""
        if self._redis:
            await self._redis.close()
            self._redis = None

    @staticmethod
    def key(instance_id: str, revision: str) -> str:
        return f"{KEY_PREFIX}{instance_id}:{revision}"

    async def get(self, instance_id: str, revision: str) -> Optional[str]:
        if not self.enabled:
            return None
        try:
            r = await self.get_redis()
            return await r.get(self.key(instance_id, revision))
        except Exception as e:
            logger.warning(f"Render cache read failed for {instance_id}: {e}")
            return None

    async def set(self, instance_id: str, revision: str, html: str) -> None:
        if not self.enabled:
            return
        try:
            r = await self.get_redis()
            await r.set(self.key(instance_id, revision), html, ex=self.ttl_seconds)
        except Exception as e:
            logger.warning(f"Render cache write failed for {instance_id}: {e}")

    async def invalidate(self, instance_id: str, revision: str) -> None:
        await self.invalidate_many([(instance_id, revision)])

    async def invalidate_many(self, entries: Iterable[tuple[str, str]]) -> None:
        """Drop the entries for the given (instance id, revision) pairs."""
        keys = [self.key(instance_id, revision) for instance_id, revision in entries]
        if not self.enabled or not keys:
            return
        try:
            r = await self.get_redis()
            await r.delete(*keys)
        except Exception as e:
            # Stale entries still expire with the TTL
            logger.warning(f"Render cache invalidation failed for {len(keys)} key(s): {e}")


# Global render cache instance
_render_cache: Optional[RenderCache] = None


def get_render_cache() -> RenderCache:
    """Get the global render cache instance."""
    global _render_cache
    if _render_cache is None:
        _render_cache = RenderCache()
    return _render_cache


async def close_render_cache():
    """Close the global render cache."""
    global _render_cache
    if _render_cache:
        await _render_cache.close()
        _render_cache = None
