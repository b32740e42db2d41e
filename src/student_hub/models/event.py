"""University calendar event."""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from student_hub.models.base import PortalRecord, coerce_datetime

EVENT_TYPES = ("academic", "club", "exam", "holiday", "other", "general")


class CalendarEvent(PortalRecord):
    """Calendar entry with a start/end window."""

    title: str
    start: datetime
    end: datetime
    event_type: str = "general"
    category: str = "General"
    description: str = ""
    location: str = ""
    organizer: str = "User"
    all_day: bool = False

    @field_validator("start", "end", mode="before")
    @classmethod
    def _parse_bounds(cls, value):
        return coerce_datetime(value)

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)
