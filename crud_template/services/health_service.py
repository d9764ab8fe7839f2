# ==============================================================================
# HEALTH SERVICE - Liveness Indicators
# ==============================================================================
# Disk, memory, HTTP ping and database indicators composed into one status
# ==============================================================================

from __future__ import annotations

import logging
import os
import time
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx
import psutil

from crud_template.core.constants import HealthConstants
from crud_template.core.settings import Settings
from crud_template.schemas.base import HealthResponse

logger = logging.getLogger(__name__)

IndicatorResult = Dict[str, Dict[str, Any]]
DatabaseCheck = Callable[[], Awaitable[bool]]


def _indicator(key: str, is_up: bool, **details: Any) -> IndicatorResult:
    status = HealthConstants.UP if is_up else HealthConstants.DOWN
    return {key: {"status": status, **details}}


class HealthService:
    """
    Computes the service health on every call.

    Indicators:
        - disk: used fraction of the configured path below threshold
        - memory heap: process data segment below threshold
        - memory rss: resident set size below threshold
        - http ping: GET on HEALTH_PING_URL succeeds (only when set)
        - database: the supplied ping callable returns True (only when set)
        - process: always up, reports pid and uptime

    The aggregate status is "ok" when every indicator is up.

    Example:
        >>> service = HealthService(settings, database_check=MongoDB.health_check)
        >>> result = await service.get_health_status()
        >>> result.status
        'ok'
    """

    def __init__(
        self,
        settings: Settings,
        database_check: Optional[DatabaseCheck] = None,
        started_at: Optional[float] = None,
    ) -> None:
        self._settings = settings
        self._database_check = database_check
        self._started_at = started_at if started_at is not None else time.time()
        self._process = psutil.Process(os.getpid())

    # ==========================================================================
    # SYSTEM INDICATORS
    # ==========================================================================

    def check_disk(self) -> IndicatorResult:
        """
        Check disk usage of DISK_HEALTH_PATH.

        Returns:
            Indicator keyed by DISK_HEALTH_KEY
        """
        key = self._settings.DISK_HEALTH_KEY
        threshold = self._settings.DISK_HEALTH_THRESHOLD
        try:
            usage = psutil.disk_usage(self._settings.DISK_HEALTH_PATH)
        except OSError as e:
            logger.error(f"Disk health check failed: {e}")
            return _indicator(key, False, message=str(e))

        used_ratio = usage.used / usage.total if usage.total else 1.0
        return _indicator(
            key,
            used_ratio < threshold,
            usedRatio=round(used_ratio, 4),
            threshold=threshold,
        )

    def check_memory_heap(self) -> IndicatorResult:
        """Check the process heap against MEMORY_HEALTH_HEAP_THRESHOLD."""
        info = self._process.memory_info()
        # "data" is only reported on Linux and BSD
        used = getattr(info, "data", info.rss)
        threshold = self._settings.MEMORY_HEALTH_HEAP_THRESHOLD
        return _indicator(
            self._settings.MEMORY_HEALTH_HEAP_KEY,
            used < threshold,
            used=used,
            threshold=threshold,
        )

    def check_memory_rss(self) -> IndicatorResult:
        """Check the resident set size against MEMORY_HEALTH_RSS_THRESHOLD."""
        used = self._process.memory_info().rss
        threshold = self._settings.MEMORY_HEALTH_RSS_THRESHOLD
        return _indicator(
            self._settings.MEMORY_HEALTH_RSS_KEY,
            used < threshold,
            used=used,
            threshold=threshold,
        )

    def check_memory(self) -> IndicatorResult:
        """Both memory indicators."""
        return {**self.check_memory_heap(), **self.check_memory_rss()}

    def check_process(self) -> IndicatorResult:
        return _indicator(
            HealthConstants.PROCESS_KEY,
            True,
            pid=self._process.pid,
            uptime=round(time.time() - self._started_at, 3),
        )

    # ==========================================================================
    # REMOTE INDICATORS
    # ==========================================================================

    async def check_http(self) -> IndicatorResult:
        """
        Ping HEALTH_PING_URL.

        Returns:
            Indicator keyed by HEALTH_PING_KEY, or an empty mapping when
            no URL is configured
        """
        url = self._settings.HEALTH_PING_URL
        if not url:
            return {}

        key = self._settings.HEALTH_PING_KEY
        try:
            async with httpx.AsyncClient(
                timeout=self._settings.HEALTH_PING_TIMEOUT
            ) as client:
                response = await client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"HTTP ping to {url} failed: {e}")
            return _indicator(key, False, message=str(e))

        return _indicator(
            key,
            response.status_code < 400,
            statusCode=response.status_code,
        )

    async def check_database(self) -> IndicatorResult:
        """Run the database ping, when one was supplied."""
        if self._database_check is None:
            return {}

        is_up = await self._database_check()
        if not is_up:
            logger.warning("Database health check failed")
        return _indicator(HealthConstants.DATABASE_KEY, is_up)

    # ==========================================================================
    # AGGREGATE
    # ==========================================================================

    async def get_health_status(self) -> HealthResponse:
        """
        Run every indicator and aggregate the results.

        Returns:
            HealthResponse with status "ok" or "error"
        """
        details: IndicatorResult = {}
        details.update(self.check_process())
        details.update(self.check_disk())
        details.update(self.check_memory())
        details.update(await self.check_http())
        details.update(await self.check_database())

        info = {
            key: value
            for key, value in details.items()
            if value["status"] == HealthConstants.UP
        }
        error = {
            key: value
            for key, value in details.items()
            if value["status"] != HealthConstants.UP
        }

        return HealthResponse(
            status=HealthConstants.OK if not error else HealthConstants.ERROR,
            info=info,
            error=error,
            details=details,
        )
