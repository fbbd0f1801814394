from typing import Optional

from event_geolocation.calendar_events.v1.structures.calendar_event import (
    CalendarEvent,
)
from event_geolocation.geolocation.v1.structures.resolved_location import (
    ResolvedLocation,
)


class EventWithLocation(CalendarEvent):
    """
    A calendar event with the result of geocoding its location: either geocoded or geocode_error is set
    """

    geocoded: Optional[ResolvedLocation] = None
    geocode_error: Optional[str] = None

    @classmethod
    def from_event(
        cls,
        event: CalendarEvent,
        *,
        geocoded: Optional[ResolvedLocation] = None,
        geocode_error: Optional[str] = None,
    ) -> "EventWithLocation":
        return cls(
            **event.model_dump(), geocoded=geocoded, geocode_error=geocode_error
        )
