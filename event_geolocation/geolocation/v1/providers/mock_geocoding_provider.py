import asyncio
from typing import Dict, List, Optional

import structlog

from event_geolocation.geolocation.v1.geocoding_errors import GeocodingError
from event_geolocation.geolocation.v1.providers.geocoding_provider import (
    GeocodingProvider,
)
from event_geolocation.geolocation.v1.structures.provider_candidate import (
    ProviderCandidate,
)

logger = structlog.get_logger(__file__)


class MockGeocodingProvider(GeocodingProvider):
    def __init__(
        self,
        candidates: Optional[Dict[str, List[ProviderCandidate]]] = None,
        errors: Optional[Dict[str, GeocodingError]] = None,
        delay_seconds: float = 0,
    ) -> None:
        """
        Provider backed by an in-memory table.  Unknown addresses have no match.

        :param candidates: address -> candidates to return
        :param errors: address -> error to raise instead
        :param delay_seconds: simulated network latency of each lookup
        """
        self.candidates: Dict[str, List[ProviderCandidate]] = candidates or {}
        self.errors: Dict[str, GeocodingError] = errors or {}
        self.delay_seconds: float = delay_seconds
        self.calls: List[str] = []
        self.max_in_flight: int = 0
        self._in_flight: int = 0

    @classmethod
    def get_provider_name(cls) -> str:
        return "mock"

    def ensure_configured(self) -> None:
        pass

    async def lookup_async(self, address: str) -> List[ProviderCandidate]:
        self.calls.append(address)
        self._in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            if self.delay_seconds:
                await asyncio.sleep(self.delay_seconds)
            if address in self.errors:
                raise self.errors[address]
            return list(self.candidates.get(address, []))
        finally:
            self._in_flight -= 1

    @property
    def call_count(self) -> int:
        return len(self.calls)
