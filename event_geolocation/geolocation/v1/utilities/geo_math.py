import math
from typing import List, Sequence, Tuple

from event_geolocation.geolocation.v1.structures.coordinates import (
    BoundingBox,
    Coordinates,
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)

EARTH_RADIUS_KM: float = 6371.0

# (span in degrees, zoom): the first entry whose span is exceeded wins.  These are
# map-centering heuristics, not values derived from the map projection
ZOOM_LEVEL_THRESHOLDS: List[Tuple[float, int]] = [
    (10.0, 6),
    (5.0, 8),
    (1.0, 10),
    (0.1, 12),
]
# zoom used when the span does not exceed any threshold, including a single point
CLOSEST_ZOOM_LEVEL: int = 14


class GeoMath:
    @staticmethod
    def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        """
        great-circle distance between two points using the haversine formula

        :return: distance in kilometers
        """
        d_lat = math.radians(lat2 - lat1)
        d_lng = math.radians(lng2 - lng1)
        a = (
            math.sin(d_lat / 2) ** 2
            + math.cos(math.radians(lat1))
            * math.cos(math.radians(lat2))
            * math.sin(d_lng / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_KM * c

    @staticmethod
    def distance_between(a: Coordinates, b: Coordinates) -> float:
        return GeoMath.distance_km(a.lat, a.lng, b.lat, b.lng)

    @staticmethod
    def bounds(points: Sequence[Coordinates]) -> BoundingBox:
        """
        Smallest box containing all points.  Latitude and longitude extremes are taken
        independently.  An empty list gives a degenerate box at (0, 0)
        """
        if not points:
            return BoundingBox(
                northeast=Coordinates(lat=0, lng=0),
                southwest=Coordinates(lat=0, lng=0),
            )
        lats = [p.lat for p in points]
        lngs = [p.lng for p in points]
        return BoundingBox(
            northeast=Coordinates(lat=max(lats), lng=max(lngs)),
            southwest=Coordinates(lat=min(lats), lng=min(lngs)),
        )

    @staticmethod
    def zoom_level(box: BoundingBox) -> int:
        """
        map zoom level for a box: the larger span of the two axes decides.  A larger span
        never gives a higher zoom
        """
        span = max(box.lat_span(), box.lng_span())
        for threshold, zoom in ZOOM_LEVEL_THRESHOLDS:
            if span > threshold:
                return zoom
        return CLOSEST_ZOOM_LEVEL

    @staticmethod
    def is_valid_coordinates(lat: float, lng: float) -> bool:
        return (
            MIN_LATITUDE <= lat <= MAX_LATITUDE
            and MIN_LONGITUDE <= lng <= MAX_LONGITUDE
        )
