from typing import Optional

from pydantic import BaseModel, Field

from event_geolocation.geolocation.v1.structures.coordinates import Coordinates
from event_geolocation.geolocation.v1.structures.resolved_location import (
    AddressComponents,
    ResolvedLocation,
)


class ProviderCandidate(BaseModel):
    """
    One match returned by a geocoding provider, in provider-neutral form.
    Providers return these in order of decreasing confidence
    """

    formatted_address: str
    lat: float
    lng: float
    place_id: Optional[str] = None
    components: AddressComponents = Field(default_factory=AddressComponents)

    def to_resolved_location(self, *, input_address: str) -> ResolvedLocation:
        return ResolvedLocation(
            input_address=input_address,
            formatted_address=self.formatted_address or input_address,
            coordinates=Coordinates(lat=self.lat, lng=self.lng),
            place_id=self.place_id,
            components=None if self.components.is_empty() else self.components,
        )
