from typing import Optional

from pydantic import BaseModel

from event_geolocation.geolocation.v1.structures.coordinates import (
    BoundingBox,
    Coordinates,
)


class EventMarker(BaseModel):
    """
    a pin handed to the map renderer
    """

    id: str
    title: str
    position: Coordinates


class MapView(BaseModel):
    """
    where the map renderer should center and how far it should zoom
    """

    center: Coordinates
    zoom: int
    bounds: Optional[BoundingBox] = None
