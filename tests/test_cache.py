# ==============================================================================
# CACHE TESTS
# ==============================================================================
# Tests for the application cache
# ==============================================================================

from unittest.mock import patch

import pytest

from crud_template.core.cache import AppCache, create_cache
from crud_template.core.settings import Settings


class TestAppCache:
    """Tests for AppCache."""

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        cache = AppCache(max_entries=2, ttl_seconds=60)

        await cache.set("a", 1)

        assert await cache.get("a") == 1
        assert await cache.get("missing") is None

    @pytest.mark.asyncio
    async def test_oldest_dropped_when_full(self):
        cache = AppCache(max_entries=2, ttl_seconds=60)

        await cache.set("a", 1)
        await cache.set("b", 2)
        await cache.set("c", 3)

        assert await cache.get("a") is None
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_expiry(self):
        cache = AppCache(max_entries=2, ttl_seconds=10)

        with patch("crud_template.core.cache.time.monotonic", return_value=100.0):
            await cache.set("a", 1)
        with patch("crud_template.core.cache.time.monotonic", return_value=110.0):
            assert await cache.get("a") is None

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_clear(self):
        cache = AppCache(max_entries=5, ttl_seconds=60)

        await cache.set("a", 1)
        await cache.set("b", 2)

        assert await cache.clear() == 2
        assert len(cache) == 0


def test_create_cache_from_settings():
    cache = create_cache(Settings(CACHE_TTL=42, CACHE_MAX_ENTRIES=7))

    assert cache.max_entries == 7
    assert cache.ttl_seconds == 42.0
