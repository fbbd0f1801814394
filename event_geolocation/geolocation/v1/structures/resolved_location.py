from typing import Any, Dict, Optional

from pydantic import BaseModel

from event_geolocation.geolocation.v1.structures.coordinates import Coordinates


class AddressComponents(BaseModel):
    """
    best-effort breakdown of a resolved address.  Missing parts are simply left as None
    """

    country: Optional[str] = None
    state: Optional[str] = None
    city: Optional[str] = None
    street: Optional[str] = None

    def is_empty(self) -> bool:
        return not any([self.country, self.state, self.city, self.street])


class ResolvedLocation(BaseModel):
    """
    The result of resolving one address to coordinates
    """

    input_address: str
    formatted_address: str
    coordinates: Coordinates
    place_id: Optional[str] = None
    components: Optional[AddressComponents] = None

    def is_valid(self) -> bool:
        return self.coordinates.is_valid()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_dict(cls, location_dict: Dict[str, Any]) -> "ResolvedLocation":
        return cls(**location_dict)
