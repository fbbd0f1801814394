from abc import ABCMeta, abstractmethod
from typing import List

from event_geolocation.geolocation.v1.structures.provider_candidate import (
    ProviderCandidate,
)


class GeocodingProvider(metaclass=ABCMeta):
    """
    An external service that turns an address into candidate coordinates
    """

    @abstractmethod
    async def lookup_async(self, address: str) -> List[ProviderCandidate]:
        """
        returns the provider's matches for the address, best match first.  An empty list means
        no match.  Failures of the call itself are raised as ProviderError

        :param address: the address exactly as the caller submitted it
        """

    @abstractmethod
    def ensure_configured(self) -> None:
        """
        raises ProviderNotConfiguredError if the provider cannot be called
        """

    @classmethod
    @abstractmethod
    def get_provider_name(cls) -> str:
        """
        returns the name of the provider
        """
        return ""
