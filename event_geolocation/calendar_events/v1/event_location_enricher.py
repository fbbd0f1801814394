from typing import List, Optional, Sequence

import structlog
from helix_fhir_client_sdk.utilities.list_chunker import ListChunker

from event_geolocation.calendar_events.v1.calendar_event_source import (
    CalendarEventSource,
)
from event_geolocation.calendar_events.v1.structures.calendar_event import (
    CalendarEvent,
    CalendarEventPage,
)
from event_geolocation.calendar_events.v1.structures.event_with_location import (
    EventWithLocation,
)
from event_geolocation.calendar_events.v1.structures.map_structures import (
    EventMarker,
    MapView,
)
from event_geolocation.geolocation.v1.geocoding_service import GeocodingService
from event_geolocation.geolocation.v1.structures.batch_outcome import (
    BatchOutcome,
    FailedAddress,
)
from event_geolocation.geolocation.v1.structures.coordinates import Coordinates
from event_geolocation.geolocation.v1.utilities.geo_math import GeoMath

logger = structlog.get_logger(__file__)

DEFAULT_MAP_CENTER: Coordinates = Coordinates(lat=48.8566, lng=2.3522)  # Paris
DEFAULT_MAP_ZOOM: int = 12


class EventLocationEnricher:
    def __init__(self, *, geocoding_service: GeocodingService) -> None:
        """
        Attaches geocoded locations to calendar events and prepares them for the map renderer

        :param geocoding_service: service used to resolve event locations
        """
        self.geocoding_service: GeocodingService = geocoding_service

    @staticmethod
    async def collect_events_async(
        source: CalendarEventSource,
    ) -> List[CalendarEvent]:
        """
        reads every page of the calendar source
        """
        events: List[CalendarEvent] = []
        next_page_token: Optional[str] = None
        done = False
        while not done:
            page: CalendarEventPage = await source.list_events_async(
                page_token=next_page_token
            )
            events.extend(page.events)
            next_page_token = page.next_page_token
            if not next_page_token:
                done = True
        logger.debug(f"Read {len(events)} calendar events", count=len(events))
        return events

    @staticmethod
    def get_events_with_locations(
        events: Sequence[CalendarEvent],
    ) -> List[CalendarEvent]:
        return [e for e in events if e.has_location()]

    async def enrich_async(
        self, events: Sequence[CalendarEvent]
    ) -> List[EventWithLocation]:
        """
        Geocodes the locations of the events that have one.  Each distinct location is resolved
        once; events sharing a location share its result.  Failures are recorded on the event
        as geocode_error

        :param events: calendar events, with or without locations
        :return: one entry per event that has a location, in input order
        """
        events_with_location = self.get_events_with_locations(events)
        if not events_with_location:
            return []

        # location is not None here, has_location() checked it
        locations: List[str] = list(
            dict.fromkeys(e.location for e in events_with_location if e.location)
        )
        outcome = BatchOutcome()
        for chunk in ListChunker().divide_into_chunks(
            locations, self.geocoding_service.config.batch_max_size
        ):
            chunk_outcome = await self.geocoding_service.resolve_many_async(chunk)
            outcome.resolved.update(chunk_outcome.resolved)
            outcome.failed.update(chunk_outcome.failed)

        enriched: List[EventWithLocation] = []
        for event, result in zip(
            events_with_location,
            outcome.expand([e.location or "" for e in events_with_location]),
        ):
            if isinstance(result, FailedAddress):
                enriched.append(
                    EventWithLocation.from_event(event, geocode_error=result.message)
                )
            else:
                enriched.append(EventWithLocation.from_event(event, geocoded=result))

        logger.info(
            "Enriched calendar events with locations",
            events=len(enriched),
            locations=len(locations),
            failed=outcome.failed_count,
        )
        return enriched

    @staticmethod
    def to_markers(events: Sequence[EventWithLocation]) -> List[EventMarker]:
        return [
            EventMarker(id=e.id, title=e.summary, position=e.geocoded.coordinates)
            for e in events
            if e.geocoded is not None
        ]

    @staticmethod
    def compute_map_view(
        events: Sequence[EventWithLocation],
        default_center: Coordinates = DEFAULT_MAP_CENTER,
        default_zoom: int = DEFAULT_MAP_ZOOM,
    ) -> MapView:
        """
        centers the map on the box around the geocoded events and picks a zoom that fits it
        """
        points: List[Coordinates] = [
            e.geocoded.coordinates for e in events if e.geocoded is not None
        ]
        if not points:
            return MapView(center=default_center, zoom=default_zoom)
        box = GeoMath.bounds(points)
        return MapView(center=box.center(), zoom=GeoMath.zoom_level(box), bounds=box)

    @staticmethod
    def find_events_near(
        events: Sequence[EventWithLocation], center: Coordinates, radius_km: float
    ) -> List[EventWithLocation]:
        return [
            e
            for e in events
            if e.geocoded is not None
            and GeoMath.distance_between(center, e.geocoded.coordinates) <= radius_km
        ]
