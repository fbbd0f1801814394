import dataclasses
from typing import Optional

from event_geolocation.geolocation.v1.structures.coordinates import Coordinates


@dataclasses.dataclass(frozen=True)
class ParsedLocation:
    """
    Output of CoordinateParser: the location text and, when one was embedded, a coordinate pair
    """

    address: str
    """location text, with a parenthesized coordinate pair removed if one was found"""
    coordinates: Optional[Coordinates] = None
    """coordinates found in the text, not range checked"""

    def has_coordinates(self) -> bool:
        return self.coordinates is not None
