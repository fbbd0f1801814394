import asyncio
from typing import Any, Dict, List, Optional, Protocol

import aiohttp
import structlog
from aiohttp import ClientError, ClientTimeout
from furl import furl
from pydantic import ValidationError

from event_geolocation.geolocation.v1.geocoding_errors import (
    ProviderError,
    ProviderNotConfiguredError,
)
from event_geolocation.geolocation.v1.providers.geocoding_provider import (
    GeocodingProvider,
)
from event_geolocation.geolocation.v1.providers.provider_responses.google_geocoding_api_response import (
    GoogleGeocodingApiResponse,
)
from event_geolocation.geolocation.v1.structures.provider_candidate import (
    ProviderCandidate,
)
from event_geolocation.utilities.aws.config import get_ssm_config

logger = structlog.get_logger(__file__)


class CustomApiCallFunction(Protocol):
    async def __call__(self, address: str) -> Dict[str, Any]:
        """
        This function is called with one address and should return the raw geocoding payload

        :param address: address to look up
        :return: payload in the Google Geocoding API json format
        """
        ...


class GoogleGeocodingProvider(GeocodingProvider):
    BASE_URL: str = "https://maps.googleapis.com/maps/api/geocode/json"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_key_ssm_path: Optional[str] = None,
        custom_api_call: Optional[CustomApiCallFunction] = None,
        timeout_seconds: float = 10,
    ) -> None:
        """
        Looks up addresses with the Google Geocoding API

        :param api_key: API key for the Google Geocoding API
        :param api_key_ssm_path: SSM path holding the key as "<path>api_key", used when api_key is not set
        :param custom_api_call: replaces the http call, e.g. for tests or a proxy
        :param timeout_seconds: total timeout of one http call
        """
        self._api_key: Optional[str] = api_key
        self._api_key_ssm_path: Optional[str] = api_key_ssm_path
        self._custom_api_call_async: Optional[CustomApiCallFunction] = custom_api_call
        self._timeout_seconds: float = timeout_seconds

    @classmethod
    def get_provider_name(cls) -> str:
        return "google"

    def ensure_configured(self) -> None:
        if self._custom_api_call_async:
            return
        self._get_request_credentials()

    async def lookup_async(self, address: str) -> List[ProviderCandidate]:
        api_server_response: Dict[str, Any] = (
            await self._custom_api_call_async(address)
            if self._custom_api_call_async
            else await self._api_call_async(address)
        )
        try:
            response = GoogleGeocodingApiResponse.from_dict(api_server_response)
        except ValidationError as e:
            logger.exception(
                f"{self.get_provider_name()} returned a malformed payload",
                address=address,
            )
            raise ProviderError(
                f"Geocoding API returned a malformed response for '{address}'",
                address,
            ) from e

        if response.is_error():
            raise ProviderError(
                f"Geocoding API error: {response.error_message or response.status}",
                address,
            )
        return response.to_provider_candidates()

    async def _api_call_async(self, address: str) -> Dict[str, Any]:
        api_key = self._get_request_credentials()["api_key"]
        url = furl(self.BASE_URL).add({"address": address, "key": api_key}).url
        headers = {"Accept": "application/json"}

        try:
            async with aiohttp.ClientSession() as session:
                logger.debug(f"Making request to {self.BASE_URL}", address=address)
                timeout = ClientTimeout(total=self._timeout_seconds)
                async with session.get(
                    url, headers=headers, timeout=timeout
                ) as response:
                    logger.debug(f"Response status: {response.status}")
                    if response.status >= 400:
                        raise ProviderError(
                            f"Geocoding API error: {response.status} {await response.text()}",
                            address,
                        )
                    api_response: Dict[str, Any] = await response.json(
                        content_type=None
                    )
        except (ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.exception(
                f"Error connecting to {self.get_provider_name()}", http_error=repr(e)
            )
            raise ProviderError(
                f"Geocoding API request failed for '{address}': {e!r}", address
            ) from e

        if not isinstance(api_response, dict):
            raise ProviderError(
                f"Geocoding API returned a malformed response for '{address}'",
                address,
            )
        return api_response

    def _get_request_credentials(self) -> Dict[str, str]:
        if self._api_key:
            api_key: Optional[str] = self._api_key
        elif self._api_key_ssm_path:
            c = get_ssm_config(self._api_key_ssm_path, truncate_keys=True)
            api_key = c.get("api_key")
            # read once; the key does not change during the life of the process
            self._api_key = api_key
        else:
            api_key = None
        if not api_key:
            raise ProviderNotConfiguredError(
                f"No API key configured for the {self.get_provider_name()} geocoding provider"
            )
        return {"api_key": api_key}
