import json
import logging

import redis.asyncio as redis

from app.config import settings

logger = logging.getLogger(__name__)


class CacheManager:
    """
    Cache-aside store for single-record detail reads, backed by Redis.

    Keys look like ``listings:detail:42``.  List pages are never cached:
    they depend on ``q``/``sort``/window and must reflect the current
    table.  Every method is a no-op (reads miss) while Redis is
    unavailable, so a cache outage never fails a request.
    """

    def __init__(self) -> None:
        self._redis: redis.Redis | None = None
        self._hits: int = 0
        self._misses: int = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        self._redis = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        try:
            await self._redis.ping()
            logger.info("Redis connected: %s", settings.REDIS_URL)
        except Exception as exc:  # pragma: no cover
            logger.warning("Redis ping failed, detail cache disabled: %s", exc)
            await self._redis.aclose()
            self._redis = None

    async def disconnect(self) -> None:
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    # ------------------------------------------------------------------
    # Detail entries
    # ------------------------------------------------------------------

    @staticmethod
    def detail_key(kind: str, record_id: int) -> str:
        return f"{kind}:detail:{record_id}"

    async def get_detail(self, kind: str, record_id: int) -> dict | None:
        if not self._redis:
            self._misses += 1
            return None
        key = self.detail_key(kind, record_id)
        try:
            data = await self._redis.get(key)
        except Exception as exc:
            logger.debug("Cache GET error for key=%r: %s", key, exc)
            self._misses += 1
            return None
        if data is None:
            self._misses += 1
            return None
        self._hits += 1
        return json.loads(data)

    async def set_detail(self, kind: str, record_id: int, value: dict) -> None:
        if not self._redis:
            return
        key = self.detail_key(kind, record_id)
        try:
            await self._redis.set(key, json.dumps(value, default=str), ex=settings.CACHE_TTL_DETAIL)
        except Exception as exc:
            logger.debug("Cache SET error for key=%r: %s", key, exc)

    async def invalidate(self, kind: str, record_id: int) -> None:
        """Drop the detail entry after an update or delete."""
        if not self._redis:
            return
        key = self.detail_key(kind, record_id)
        try:
            await self._redis.delete(key)
        except Exception as exc:
            logger.debug("Cache DELETE error for key=%r: %s", key, exc)

    @property
    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }


cache = CacheManager()
