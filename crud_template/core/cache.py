# ==============================================================================
# CACHE - Application TTL Cache
# ==============================================================================
# Registered on app.state.cache at startup and cleared on shutdown
# No CRUD operation reads from it
# ==============================================================================

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from typing import Any, Optional, Tuple

from crud_template.core.settings import Settings

logger = logging.getLogger(__name__)


class AppCache:
    """
    Bounded TTL cache shared by request handlers.

    Entries expire ``ttl_seconds`` after they were set; once
    ``max_entries`` is reached the oldest entry is dropped.

    Example:
        >>> cache = request.app.state.cache
        >>> await cache.set("rates", rates)
        >>> await cache.get("rates")
    """

    def __init__(self, max_entries: int, ttl_seconds: float) -> None:
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._entries: OrderedDict[str, Tuple[float, Any]] = OrderedDict()
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> Optional[Any]:
        """Value for ``key``, or None when missing or expired."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return value

    async def set(self, key: str, value: Any) -> None:
        async with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
            self._entries[key] = (time.monotonic() + self.ttl_seconds, value)

    async def clear(self) -> int:
        """Drop every entry. Returns how many were dropped."""
        async with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count


def create_cache(settings: Settings) -> AppCache:
    """Build the application cache from CACHE_TTL and CACHE_MAX_ENTRIES."""
    cache = AppCache(
        max_entries=settings.CACHE_MAX_ENTRIES,
        ttl_seconds=float(settings.CACHE_TTL),
    )
    logger.info(
        f"Cache registered: max_entries={cache.max_entries}, ttl={cache.ttl_seconds}s"
    )
    return cache
