from typing import Optional, Protocol

from event_geolocation.calendar_events.v1.structures.calendar_event import (
    CalendarEventPage,
)


class CalendarEventSource(Protocol):
    async def list_events_async(
        self, page_token: Optional[str] = None
    ) -> CalendarEventPage:
        """
        Returns one page of calendar events

        :param page_token: token of the page to read, None for the first page
        :return: the events of the page and the token of the next page, if any
        """
        ...
