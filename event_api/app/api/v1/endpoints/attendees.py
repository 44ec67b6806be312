"""
Attendee endpoints for API v1.

The event owner adds and removes attendees; the rosters themselves are
public.  A user can attend an event at most once, so adding an existing
pairing yields 409.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from event_api.app.core.exceptions import DuplicateAttendeeError
from event_api.app.core.helpers import MAX_ID, get_event_or_404, get_user_or_404, require_owner
from event_api.app.core.security import get_current_user
from event_api.app.schemas.attendee import AttendeeRead
from event_api.app.schemas.event import EventRead
from event_api.app.schemas.user import UserRead
from event_api.app.services.attendee_service import AttendeeService
from event_api.app.services.event_service import EventService


router = APIRouter()


@router.post(
    "/events/{event_id}/attendees/{user_id}",
    response_model=AttendeeRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_attendee_to_event(
    event_id: int = Path(..., ge=1, le=MAX_ID, description="Event ID"),
    user_id: int = Path(..., ge=1, le=MAX_ID, description="User ID"),
    current_user: UserRead = Depends(get_current_user),
) -> AttendeeRead:
    """Add a user to an event's attendees (owner only)."""
    event = await get_event_or_404(event_id)
    require_owner(event, current_user)
    await get_user_or_404(user_id)

    existing = await AttendeeService.get_by_event_and_attendee(event_id, user_id)
    if existing is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Attendee exists")
    try:
        return await AttendeeService.insert(event_id, user_id)
    except DuplicateAttendeeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Attendee exists") from e


@router.get("/events/{event_id}/attendees", response_model=List[UserRead])
async def get_attendees_for_event(
    event_id: int = Path(..., ge=1, le=MAX_ID, description="Event ID"),
) -> List[UserRead]:
    """List the users attending an event."""
    return await AttendeeService.get_attendees_by_event(event_id)


@router.delete(
    "/events/{event_id}/attendees/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_attendee_from_event(
    event_id: int = Path(..., ge=1, le=MAX_ID, description="Event ID"),
    user_id: int = Path(..., ge=1, le=MAX_ID, description="User ID"),
    current_user: UserRead = Depends(get_current_user),
) -> None:
    """Remove a user from an event's attendees (owner only)."""
    event = await get_event_or_404(event_id)
    require_owner(event, current_user)
    await AttendeeService.delete(event_id, user_id)
    return None


@router.get("/attendees/{user_id}/events", response_model=List[EventRead])
async def get_events_by_attendee(
    user_id: int = Path(..., ge=1, le=MAX_ID, description="Attendee user ID"),
) -> List[EventRead]:
    """List the events a user attends."""
    return await EventService.get_by_attendee(user_id)
