"""
Pydantic models for attendance records.

An attendee row links one user to one event.  The list endpoints
return the joined ``UserRead``/``EventRead`` models instead; this
schema is what adding an attendee returns.
"""

from pydantic import BaseModel, Field


class AttendeeRead(BaseModel):
    id: int
    user_id: int = Field(..., alias="userId")
    event_id: int = Field(..., alias="eventId")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }
