"""
Event endpoints for API v1.

Anyone may list and read events.  Creating an event requires a bearer
token and makes the caller its owner; only the owner may update or
delete it.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status

from event_api.app.core.exceptions import NoRowsAffectedError
from event_api.app.core.helpers import MAX_ID, get_event_or_404, require_owner
from event_api.app.core.security import get_current_user
from event_api.app.schemas.event import EventCreate, EventDeleted, EventRead, EventUpdate
from event_api.app.schemas.user import UserRead
from event_api.app.services.event_service import EventService


router = APIRouter()


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    current_user: UserRead = Depends(get_current_user),
) -> EventRead:
    """Create a new event owned by the authenticated user."""
    return await EventService.insert(event, owner_id=current_user.id)


@router.get("", response_model=List[EventRead])
async def list_events() -> List[EventRead]:
    """Return all events."""
    return await EventService.get_all()


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: int = Path(..., ge=1, le=MAX_ID, description="Event ID")) -> EventRead:
    """Retrieve a single event by its ID.  Raises 404 if it does not exist."""
    return await get_event_or_404(event_id)


@router.put("/{event_id}", response_model=EventRead)
async def update_event(
    updates: EventUpdate,
    event_id: int = Path(..., ge=1, le=MAX_ID, description="Event ID"),
    current_user: UserRead = Depends(get_current_user),
) -> EventRead:
    """Replace an existing event.

    Only the owner may modify it.  The owner itself cannot be changed.
    """
    event = await get_event_or_404(event_id)
    require_owner(event, current_user)
    try:
        return await EventService.update(event_id, updates)
    except NoRowsAffectedError as e:
        # Deleted between the lookup and the update.
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="event not found") from e


@router.delete("/{event_id}", response_model=EventDeleted)
async def delete_event(
    event_id: int = Path(..., ge=1, le=MAX_ID, description="Event ID"),
    current_user: UserRead = Depends(get_current_user),
) -> EventDeleted:
    """Delete an event (owner only).

    Attendee rows of the event are removed with it.
    """
    event = await get_event_or_404(event_id)
    require_owner(event, current_user)
    try:
        await EventService.delete(event_id)
    except NoRowsAffectedError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="event not found") from e
    return EventDeleted(event_id=event_id)
