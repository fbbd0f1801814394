import asyncio
from typing import Optional

import structlog

from event_geolocation.geolocation.v1.cache.geocode_cache import GeocodeCache

logger = structlog.get_logger(__file__)


class CacheMaintenance:
    def __init__(self, *, cache: GeocodeCache, interval_seconds: float) -> None:
        """
        Periodically removes expired entries from a cache on the running event loop

        :param cache: cache to sweep
        :param interval_seconds: time between sweeps
        """
        assert interval_seconds > 0, "interval_seconds must be positive"
        self.cache: GeocodeCache = cache
        self.interval_seconds: float = interval_seconds
        self._task: Optional["asyncio.Task[None]"] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """
        starts the sweep task.  Must be called from a coroutine since it needs a running loop
        """
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run_async(), name="geocode_cache_maintenance"
        )
        logger.info(
            "Started geocoding cache maintenance",
            interval_seconds=self.interval_seconds,
        )

    async def stop_async(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Stopped geocoding cache maintenance")

    async def _run_async(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            self.cache.sweep_expired()
