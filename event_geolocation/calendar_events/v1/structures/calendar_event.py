from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class EventStatus(Enum):
    CONFIRMED = "confirmed"
    TENTATIVE = "tentative"
    CANCELLED = "cancelled"


class EventAttendee(BaseModel):
    email: str
    display_name: Optional[str] = None
    response_status: str = "needsAction"
    optional: bool = False


class CalendarEvent(BaseModel):
    """
    An event as read from the calendar source.  Only location is used for geocoding
    """

    id: str
    summary: str = "Untitled Event"
    description: Optional[str] = None
    location: Optional[str] = None
    start_time: datetime
    end_time: datetime
    status: EventStatus = EventStatus.CONFIRMED
    attendees: List[EventAttendee] = Field(default_factory=list)

    def has_location(self) -> bool:
        return bool(self.location and self.location.strip())


class CalendarEventPage(BaseModel):
    """
    one page of the paginated calendar read call
    """

    events: List[CalendarEvent] = Field(default_factory=list)
    next_page_token: Optional[str] = None
