import asyncio
from typing import List, Optional

import structlog

from event_geolocation.geolocation.v1.cache.geocode_cache import GeocodeCache
from event_geolocation.geolocation.v1.geocoding_errors import (
    AddressNotFoundError,
    InvalidInputError,
    ProviderError,
)
from event_geolocation.geolocation.v1.providers.geocoding_provider import (
    GeocodingProvider,
)
from event_geolocation.geolocation.v1.structures.parsed_location import (
    ParsedLocation,
)
from event_geolocation.geolocation.v1.structures.provider_candidate import (
    ProviderCandidate,
)
from event_geolocation.geolocation.v1.structures.resolved_location import (
    ResolvedLocation,
)
from event_geolocation.geolocation.v1.utilities.coordinate_parser import (
    CoordinateParser,
)

logger = structlog.get_logger(__file__)


class GeocodeResolver:
    def __init__(
        self,
        *,
        cache: GeocodeCache,
        provider: GeocodingProvider,
        provider_timeout_seconds: Optional[float] = 10,
    ) -> None:
        """
        Resolves one address at a time: cache, then coordinates typed into the address, then the provider

        :param cache: cache shared by all resolutions
        :param provider: external geocoding provider
        :param provider_timeout_seconds: timeout of one provider call, None for no timeout
        """
        self.cache: GeocodeCache = cache
        self.provider: GeocodingProvider = provider
        self.provider_timeout_seconds: Optional[float] = provider_timeout_seconds

    async def resolve_async(self, address: str) -> ResolvedLocation:
        """
        Resolves the address or raises a GeocodingError.  Nothing is retried here

        :param address: free text address
        :return: resolved location with in-range coordinates
        """
        if not isinstance(address, str) or not address.strip():
            raise InvalidInputError("Address is required", address=str(address))

        cached: Optional[ResolvedLocation] = self.cache.get(address)
        if cached is not None:
            logger.debug(f'Cache hit for "{address}"', address=address)
            return cached

        # coordinates typed into the address are cheap to re-parse so they are not cached
        shortcut: Optional[ResolvedLocation] = self._resolve_embedded_coordinates(
            address
        )
        if shortcut is not None:
            logger.debug(
                f'Using coordinates embedded in "{address}"', address=address
            )
            return shortcut

        location: ResolvedLocation = await self._lookup_async(address)
        self.cache.put(address, location)
        logger.info(f'Successfully geocoded "{address}"', address=address)
        return location

    @staticmethod
    def _resolve_embedded_coordinates(address: str) -> Optional[ResolvedLocation]:
        parsed: ParsedLocation = CoordinateParser.parse(address)
        if parsed.coordinates is None or not parsed.coordinates.is_valid():
            return None
        return ResolvedLocation(
            input_address=address,
            formatted_address=address,
            coordinates=parsed.coordinates,
        )

    async def _lookup_async(self, address: str) -> ResolvedLocation:
        self.provider.ensure_configured()
        try:
            candidates: List[ProviderCandidate] = await asyncio.wait_for(
                self.provider.lookup_async(address),
                timeout=self.provider_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                f"Geocoding provider timed out after {self.provider_timeout_seconds}s",
                address=address,
                provider=self.provider.get_provider_name(),
            )
            raise ProviderError(
                f"Geocoding provider timed out for '{address}'", address
            ) from e

        if not candidates:
            raise AddressNotFoundError(address)

        location: ResolvedLocation = candidates[0].to_resolved_location(
            input_address=address
        )
        if not location.is_valid():
            raise ProviderError(
                f"Geocoding provider returned out of range coordinates for '{address}':"
                f" {location.coordinates.lat}, {location.coordinates.lng}",
                address,
            )
        return location
