from typing import List, Optional, Sequence

import structlog

from event_geolocation.geolocation.v1.batch_resolver import BatchResolver
from event_geolocation.geolocation.v1.cache.cache_entry import CacheStats
from event_geolocation.geolocation.v1.cache.cache_maintenance import (
    CacheMaintenance,
)
from event_geolocation.geolocation.v1.cache.geocode_cache import GeocodeCache
from event_geolocation.geolocation.v1.geocode_resolver import GeocodeResolver
from event_geolocation.geolocation.v1.geocoding_config import GeocodingConfig
from event_geolocation.geolocation.v1.geocoding_errors import ProviderError
from event_geolocation.geolocation.v1.providers.geocoding_provider import (
    GeocodingProvider,
)
from event_geolocation.geolocation.v1.providers.geocoding_provider_factory import (
    GeocodingProviderFactory,
)
from event_geolocation.geolocation.v1.providers.google_geocoding_provider import (
    GoogleGeocodingProvider,
)
from event_geolocation.geolocation.v1.structures.batch_outcome import BatchOutcome
from event_geolocation.geolocation.v1.structures.coordinates import (
    BoundingBox,
    Coordinates,
)
from event_geolocation.geolocation.v1.structures.resolved_location import (
    ResolvedLocation,
)
from event_geolocation.geolocation.v1.utilities.geo_math import GeoMath
from event_geolocation.utilities.retry_helper import retry_with_backoff_async

logger = structlog.get_logger(__file__)


class GeocodingService:
    def __init__(
        self,
        *,
        config: GeocodingConfig,
        cache: GeocodeCache,
        provider: GeocodingProvider,
    ) -> None:
        """
        Entry point used by request handling code.  Owns the cache and wires it into the
        single address and batch resolvers.  Use create() to build one from a config

        :param config: settings
        :param cache: cache owned by this service
        :param provider: external geocoding provider
        """
        self.config: GeocodingConfig = config
        self.cache: GeocodeCache = cache
        self.provider: GeocodingProvider = provider
        self.resolver: GeocodeResolver = GeocodeResolver(
            cache=cache,
            provider=provider,
            provider_timeout_seconds=config.provider_timeout_seconds,
        )
        self.batch_resolver: BatchResolver = BatchResolver(
            resolver=self.resolver,
            concurrency=config.batch_concurrency,
            max_batch_size=config.batch_max_size,
            group_delay_seconds=config.batch_group_delay_seconds,
        )
        self._maintenance: Optional[CacheMaintenance] = None

    @classmethod
    def create(
        cls,
        config: Optional[GeocodingConfig] = None,
        provider: Optional[GeocodingProvider] = None,
    ) -> "GeocodingService":
        """
        Builds a service with a fresh cache.  The provider credential is checked here so a
        missing key fails at startup instead of on the first lookup

        :param config: settings, read from the environment when not given
        :param provider: provider to use instead of the one named in config
        """
        config = config or GeocodingConfig.from_environment()
        if provider is None:
            provider = cls._create_provider(config)
        provider.ensure_configured()
        cache = GeocodeCache(
            ttl_seconds=config.cache_ttl_seconds, max_size=config.cache_max_size
        )
        logger.info(
            "Created geocoding service",
            provider=provider.get_provider_name(),
            cache_ttl_seconds=config.cache_ttl_seconds,
            cache_max_size=config.cache_max_size,
        )
        return cls(config=config, cache=cache, provider=provider)

    @staticmethod
    def _create_provider(config: GeocodingConfig) -> GeocodingProvider:
        provider_class = GeocodingProviderFactory.get_provider_class(
            config.provider_name
        )
        if provider_class is GoogleGeocodingProvider:
            return GoogleGeocodingProvider(
                api_key=config.api_key,
                api_key_ssm_path=config.api_key_ssm_path,
                timeout_seconds=config.provider_timeout_seconds,
            )
        return provider_class()

    async def resolve_one_async(self, address: str) -> ResolvedLocation:
        return await self.resolver.resolve_async(address)

    async def resolve_one_with_retry_async(
        self,
        address: str,
        max_retries: int = 3,
        initial_delay_seconds: float = 0.1,
    ) -> ResolvedLocation:
        """
        like resolve_one_async but retries provider errors with exponential backoff
        """
        return await retry_with_backoff_async(
            lambda: self.resolver.resolve_async(address),
            max_retries=max_retries,
            initial_delay_seconds=initial_delay_seconds,
            retry_on=(ProviderError,),
        )

    async def resolve_many_async(
        self, addresses: List[str], concurrency: Optional[int] = None
    ) -> BatchOutcome:
        return await self.batch_resolver.resolve_many_async(
            addresses, concurrency=concurrency
        )

    # noinspection PyMethodMayBeStatic
    def distance(self, p1: Coordinates, p2: Coordinates) -> float:
        return GeoMath.distance_between(p1, p2)

    # noinspection PyMethodMayBeStatic
    def bounds(self, points: Sequence[Coordinates]) -> BoundingBox:
        return GeoMath.bounds(points)

    # noinspection PyMethodMayBeStatic
    def zoom_level(self, box: BoundingBox) -> int:
        return GeoMath.zoom_level(box)

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def clear_cache(self) -> int:
        return self.cache.clear()

    def start_cache_maintenance(self) -> None:
        """
        starts sweeping expired cache entries in the background.  Needs a running event loop
        """
        if self._maintenance is None:
            self._maintenance = CacheMaintenance(
                cache=self.cache,
                interval_seconds=self.config.cache_sweep_interval_seconds,
            )
        self._maintenance.start()

    @property
    def is_cache_maintenance_running(self) -> bool:
        return self._maintenance is not None and self._maintenance.is_running

    async def shutdown_async(self) -> None:
        if self._maintenance is not None:
            await self._maintenance.stop_async()
        self.cache.clear()
        logger.info("Geocoding service shut down")
