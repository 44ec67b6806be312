"""
Pydantic models for event data.

The ``EventBase`` class contains the fields a client supplies;
``EventCreate`` and ``EventUpdate`` reuse it for request bodies and
``EventRead`` extends it with the identifiers for responses.  Dates are
calendar dates in ISO 8601 form (``YYYY-MM-DD``).
"""

import datetime as dt
import re

from pydantic import BaseModel, Field, field_validator

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class EventBase(BaseModel):
    name: str = Field(..., min_length=3, examples=["Go meetup"])
    description: str = Field(..., min_length=10, examples=["Monthly meetup for Go developers"])
    date: dt.date = Field(..., examples=["2025-09-01"])
    location: str = Field(..., min_length=3, examples=["Hanoi"])

    @field_validator("date", mode="before")
    @classmethod
    def date_is_iso_calendar_date(cls, value):
        # Accept date objects and YYYY-MM-DD strings only.
        if isinstance(value, dt.datetime):
            raise ValueError("date must be a YYYY-MM-DD string")
        if isinstance(value, dt.date):
            return value
        if isinstance(value, str) and ISO_DATE.fullmatch(value):
            return value
        raise ValueError("date must be a YYYY-MM-DD string")


class EventCreate(EventBase):
    """Schema for creating an event.

    The owner is always the authenticated caller; ``ownerId`` or ``id``
    in the body are ignored.
    """
    pass


class EventUpdate(EventBase):
    """Schema for updating an event.

    PUT replaces the event, so every field is required.
    """
    pass


class EventRead(EventBase):
    """Schema for reading an event from the API."""

    id: int
    owner_id: int = Field(..., alias="ownerId")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }


class EventDeleted(BaseModel):
    event_id: int = Field(..., alias="eventId")

    model_config = {
        "populate_by_name": True,
    }
