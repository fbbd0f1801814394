from typing import Dict, Type

from event_geolocation.geolocation.v1.providers.geocoding_provider import (
    GeocodingProvider,
)
from event_geolocation.geolocation.v1.providers.google_geocoding_provider import (
    GoogleGeocodingProvider,
)
from event_geolocation.geolocation.v1.providers.mock_geocoding_provider import (
    MockGeocodingProvider,
)


class GeocodingProviderFactory:
    provider_class_map: Dict[str, Type[GeocodingProvider]] = {
        p.get_provider_name(): p
        for p in [GoogleGeocodingProvider, MockGeocodingProvider]
    }

    @staticmethod
    def get_provider_class(provider_name: str) -> Type[GeocodingProvider]:
        """
        find the right provider class for the provider name
        """
        try:
            return GeocodingProviderFactory.provider_class_map[provider_name.lower()]
        except KeyError:
            raise KeyError(f"No provider Class found for {provider_name}!")
