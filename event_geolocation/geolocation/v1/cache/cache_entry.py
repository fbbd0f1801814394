import dataclasses
from typing import Any, Dict

from event_geolocation.geolocation.v1.structures.resolved_location import (
    ResolvedLocation,
)


@dataclasses.dataclass(frozen=True)
class CacheEntry:
    """
    A cached location with the time it was stored.  Only GeocodeCache creates and reads these
    """

    location: ResolvedLocation
    created_at: float
    """clock value when the entry was stored"""
    ttl: float
    """seconds the entry stays valid"""

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


@dataclasses.dataclass(frozen=True)
class CacheStats:
    size: int
    max_size: int
    ttl: float

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)
