"""
Calendar event and e-mail action models supplied by external collaborators.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from dayplanner.models.enums import CreatedFrom, EventCategory, EventFlexibility, EventSource
from dayplanner.models.task import Person, Task


class MeetingInfo(BaseModel):
    """Meeting metadata attached to an event."""

    attendees: list[Person] = Field(default_factory=list)
    meeting_link: Optional[str] = None
    organizer: Optional[Person] = None


class Event(BaseModel):
    """Calendar item occupying time on the planned day."""

    id: str
    title: str
    start: datetime
    end: datetime
    source: EventSource = EventSource.EXTERNAL
    meeting: MeetingInfo = Field(default_factory=MeetingInfo)
    category: EventCategory = EventCategory.OTHER
    flexibility: EventFlexibility = EventFlexibility.FIXED
    created_from: CreatedFrom = CreatedFrom.CALENDAR

    @model_validator(mode="after")
    def validate_span(self):
        """Events must end after they start."""
        same_awareness = (self.start.tzinfo is None) == (self.end.tzinfo is None)
        if same_awareness and self.end <= self.start:
            raise ValueError("Event end must be after its start")
        return self


class EmailAction(BaseModel):
    """Actionable e-mail thread with the tasks extracted from it."""

    id: str
    subject: str
    snippet: str
    extracted_tasks: list[Task] = Field(default_factory=list)
    due_date: Optional[datetime] = None
    participants: list[Person] = Field(default_factory=list)
