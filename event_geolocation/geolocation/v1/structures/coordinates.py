from typing import Dict

from pydantic import BaseModel

MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0
MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0


class Coordinates(BaseModel):
    """
    A latitude/longitude pair in decimal degrees.  Range is not enforced on construction
    so that parsed or vendor supplied values can be inspected before they are accepted
    """

    lat: float
    lng: float

    def is_valid(self) -> bool:
        return (
            MIN_LATITUDE <= self.lat <= MAX_LATITUDE
            and MIN_LONGITUDE <= self.lng <= MAX_LONGITUDE
        )

    def to_dict(self) -> Dict[str, float]:
        return self.model_dump()


class BoundingBox(BaseModel):
    """
    smallest axis-aligned rectangle containing a set of coordinates
    """

    northeast: Coordinates
    southwest: Coordinates

    def lat_span(self) -> float:
        return self.northeast.lat - self.southwest.lat

    def lng_span(self) -> float:
        return self.northeast.lng - self.southwest.lng

    def center(self) -> Coordinates:
        return Coordinates(
            lat=(self.northeast.lat + self.southwest.lat) / 2,
            lng=(self.northeast.lng + self.southwest.lng) / 2,
        )
