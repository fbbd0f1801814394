import threading
import time
from collections import OrderedDict
from typing import Callable, List, Optional

import structlog

from event_geolocation.geolocation.v1.cache.cache_entry import (
    CacheEntry,
    CacheStats,
)
from event_geolocation.geolocation.v1.structures.resolved_location import (
    ResolvedLocation,
)

logger = structlog.get_logger(__file__)


class GeocodeCache:
    def __init__(
        self,
        *,
        ttl_seconds: float = 60 * 60,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        In-memory address -> location cache shared by all resolutions in the process.

        Entries expire lazily on read once older than ttl_seconds.  After each insert the oldest
        entries (by insertion time, reads do not refresh them) are evicted until max_size
        entries remain.

        :param ttl_seconds: lifetime of an entry
        :param max_size: maximum number of entries
        :param clock: returns the current time in seconds, replaceable in tests
        """
        assert max_size > 0, "max_size must be positive"
        self.ttl_seconds: float = ttl_seconds
        self.max_size: int = max_size
        self._clock: Callable[[], float] = clock
        # kept in insertion order so the first item is always the oldest
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock: threading.Lock = threading.Lock()

    @staticmethod
    def get_cache_key(address: str) -> str:
        return address.strip().lower()

    def get(self, address: str) -> Optional[ResolvedLocation]:
        key = self.get_cache_key(address)
        with self._lock:
            entry: Optional[CacheEntry] = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                logger.debug("Expired geocoding cache entry", address=address)
                return None
            return entry.location

    def put(self, address: str, location: ResolvedLocation) -> bool:
        """
        stores the location for the address.  Locations with out of range coordinates are refused

        :return: True if the location was stored
        """
        if not location.is_valid():
            logger.warning(
                "Refusing to cache location with invalid coordinates",
                address=address,
                coordinates=location.coordinates.to_dict(),
            )
            return False
        key = self.get_cache_key(address)
        with self._lock:
            # re-inserting moves an existing key to the end
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(
                location=location, created_at=self._clock(), ttl=self.ttl_seconds
            )
            evicted: int = self._evict_oldest()
        if evicted:
            logger.info(
                f"Cache size exceeded. Removed {evicted} entries.",
                count=evicted,
                max_size=self.max_size,
            )
        return True

    def _evict_oldest(self) -> int:
        evicted = 0
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)
            evicted += 1
        return evicted

    def sweep_expired(self) -> int:
        """
        removes every expired entry.  Not needed for correctness since get() never returns stale data

        :return: number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired_keys: List[str] = [
                key for key, entry in self._entries.items() if entry.is_expired(now)
            ]
            for key in expired_keys:
                del self._entries[key]
        if expired_keys:
            logger.info(
                f"Cleared {len(expired_keys)} expired geocoding cache entries",
                count=len(expired_keys),
            )
        return len(expired_keys)

    def clear(self) -> int:
        with self._lock:
            size = len(self._entries)
            self._entries.clear()
        logger.info(f"Cleared {size} geocoding cache entries", count=size)
        return size

    def stats(self) -> CacheStats:
        with self._lock:
            size = len(self._entries)
        return CacheStats(size=size, max_size=self.max_size, ttl=self.ttl_seconds)

    def __bool__(self) -> bool:
        # an empty cache is still a cache
        return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.get(address) is not None
