import re
from typing import Pattern

from event_geolocation.geolocation.v1.structures.coordinates import Coordinates
from event_geolocation.geolocation.v1.structures.parsed_location import (
    ParsedLocation,
)

# "(37.7749, -122.4194)" anywhere in the text
PARENTHESIZED_PAIR_RE: Pattern[str] = re.compile(
    r"\((-?\d+\.?\d*),\s*(-?\d+\.?\d*)\)"
)
# the whole text is "40.7128,-74.0060"
BARE_PAIR_RE: Pattern[str] = re.compile(r"^(-?\d+\.?\d*)\s*,\s*(-?\d+\.?\d*)$")


class CoordinateParser:
    """
    Finds coordinates typed directly into a location string so they can be used without
    calling a geocoding provider
    """

    @staticmethod
    def parse(location: str) -> ParsedLocation:
        """
        Looks for a "(lat, lng)" pair anywhere in the text, then for text that is only "lat,lng".
        Values are not range checked here

        :param location: free text location
        :return: parsed location; coordinates is None when nothing was found
        """
        match = PARENTHESIZED_PAIR_RE.search(location)
        if match:
            remaining: str = location[: match.start()] + location[match.end() :]
            return ParsedLocation(
                address=remaining.strip(),
                coordinates=CoordinateParser._to_coordinates(
                    match.group(1), match.group(2)
                ),
            )

        match = BARE_PAIR_RE.match(location.strip())
        if match:
            return ParsedLocation(
                address=location,
                coordinates=CoordinateParser._to_coordinates(
                    match.group(1), match.group(2)
                ),
            )

        return ParsedLocation(address=location)

    @staticmethod
    def _to_coordinates(lat: str, lng: str) -> Coordinates:
        return Coordinates(lat=float(lat), lng=float(lng))
