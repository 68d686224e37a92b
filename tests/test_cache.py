"""
Detail cache tests — the cache-aside path against a mocked Redis client.
"""
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from app.cache import cache
from app.config import settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_redis(store: dict) -> MagicMock:
    """A ``redis.asyncio.Redis`` mock whose get/set/delete read and write *store*."""
    client = MagicMock()
    client.get = AsyncMock(side_effect=store.get)
    client.set = AsyncMock(side_effect=lambda key, value, ex=None: store.__setitem__(key, value))
    client.delete = AsyncMock(side_effect=lambda *keys: sum(store.pop(k, None) is not None for k in keys))
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def redis_store(async_client: AsyncClient):
    # Requests async_client so the mock is installed after the client resets the cache.
    store: dict[str, str] = {}
    cache._redis = _make_redis(store)
    yield store
    cache._redis = None


# ---------------------------------------------------------------------------
# Cache-aside through the API
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_detail_read_populates_cache(async_client: AsyncClient, redis_store):
    created = (await async_client.post("/api/market/products", json={
        "name": "Camera", "description": "mirrorless body", "price": 500000,
    })).json()

    resp = await async_client.get(f"/api/market/products/{created['id']}")
    assert resp.status_code == 200
    cached = json.loads(redis_store[f"listings:detail:{created['id']}"])
    assert cached["name"] == "Camera"
    cache._redis.set.assert_awaited_once()
    assert cache._redis.set.await_args.kwargs["ex"] == settings.CACHE_TTL_DETAIL


@pytest.mark.asyncio
async def test_second_read_is_served_from_cache(async_client: AsyncClient, redis_store):
    created = (await async_client.post("/api/market/products", json={
        "name": "Tripod", "description": "carbon legs", "price": 12000,
    })).json()

    first = await async_client.get(f"/api/market/products/{created['id']}")
    second = await async_client.get(f"/api/market/products/{created['id']}")
    assert first.json() == second.json()
    # Only the first read misses and writes back.
    cache._redis.set.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_invalidates_detail(async_client: AsyncClient, redis_store):
    created = (await async_client.post("/api/board/articles", json={
        "title": "Cached", "content": "stale soon",
    })).json()
    key = f"articles:detail:{created['id']}"

    await async_client.get(f"/api/board/articles/{created['id']}")
    assert key in redis_store

    await async_client.patch(f"/api/board/articles/{created['id']}", json={"content": "fresh content"})
    assert key not in redis_store
    cache._redis.delete.assert_awaited_with(key)

    resp = await async_client.get(f"/api/board/articles/{created['id']}")
    assert resp.json()["content"] == "fresh content"


@pytest.mark.asyncio
async def test_delete_invalidates_detail(async_client: AsyncClient, redis_store):
    created = (await async_client.post("/api/market/products", json={
        "name": "Sofa", "description": "three seater", "price": 0,
    })).json()
    await async_client.get(f"/api/market/products/{created['id']}")

    await async_client.delete(f"/api/market/products/{created['id']}")
    assert f"listings:detail:{created['id']}" not in redis_store
    resp = await async_client.get(f"/api/market/products/{created['id']}")
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Degraded modes
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_redis_errors_fall_through_to_database(async_client: AsyncClient, redis_store):
    cache._redis.get = AsyncMock(side_effect=ConnectionError("redis down"))
    cache._redis.set = AsyncMock(side_effect=ConnectionError("redis down"))
    created = (await async_client.post("/api/market/products", json={
        "name": "Kettle", "description": "electric, 1.7l", "price": 3000,
    })).json()

    resp = await async_client.get(f"/api/market/products/{created['id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Kettle"


@pytest.mark.asyncio
async def test_cache_misses_without_redis():
    cache._redis = None
    assert await cache.get_detail("listings", 1) is None
    await cache.set_detail("listings", 1, {"id": 1})
    await cache.invalidate("listings", 1)
    assert cache.stats["misses"] >= 1
