from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from event_geolocation.geolocation.v1.structures.provider_candidate import (
    ProviderCandidate,
)
from event_geolocation.geolocation.v1.structures.resolved_location import (
    AddressComponents,
)

# statuses that are answers rather than failures
GOOGLE_SUCCESS_STATUSES: List[str] = ["OK", "ZERO_RESULTS"]


class GoogleLatLng(BaseModel):
    model_config = ConfigDict(extra="ignore")

    lat: float
    lng: float


class GoogleGeometry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    location: GoogleLatLng


class GoogleAddressComponent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    long_name: str = ""
    short_name: str = ""
    types: List[str] = Field(default_factory=list)


class GoogleGeocodingResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    formatted_address: str = ""
    geometry: GoogleGeometry
    place_id: Optional[str] = None
    address_components: List[GoogleAddressComponent] = Field(default_factory=list)

    def to_address_components(self) -> AddressComponents:
        """
        picks country, state, city and street out of the component list.  A component missing
        from the response is left as None
        """
        components = AddressComponents()
        for component in self.address_components:
            if "country" in component.types:
                components.country = component.long_name or None
            elif "administrative_area_level_1" in component.types:
                components.state = component.short_name or None
            elif "locality" in component.types:
                components.city = component.long_name or None
            elif "route" in component.types:
                components.street = component.long_name or None
        return components

    def to_provider_candidate(self) -> ProviderCandidate:
        return ProviderCandidate(
            formatted_address=self.formatted_address,
            lat=self.geometry.location.lat,
            lng=self.geometry.location.lng,
            place_id=self.place_id,
            components=self.to_address_components(),
        )


class GoogleGeocodingApiResponse(BaseModel):
    """
    https://developers.google.com/maps/documentation/geocoding/requests-geocoding#GeocodingResponses
    """

    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = None
    error_message: Optional[str] = None
    results: List[GoogleGeocodingResult] = Field(default_factory=list)

    def is_error(self) -> bool:
        return bool(self.error_message) or (
            self.status is not None and self.status not in GOOGLE_SUCCESS_STATUSES
        )

    def to_provider_candidates(self) -> List[ProviderCandidate]:
        return [r.to_provider_candidate() for r in self.results]

    @classmethod
    def from_dict(cls, response: Dict[str, Any]) -> "GoogleGeocodingApiResponse":
        return cls.model_validate(response)
