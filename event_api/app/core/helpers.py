"""
Request helpers shared by the route handlers and error handlers.

``error_response`` builds the uniform failure envelope
``{"status": "fail", "error": "<message>"}``.  The ``*_or_404`` helpers
load a row or abort the request, and ``require_owner`` aborts with 403
when the caller does not own the event.
"""

from typing import Mapping, Optional

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..schemas.event import EventRead
from ..schemas.user import UserRead
from ..services.event_service import EventService
from ..services.user_service import UserService

# Largest id a SQLite INTEGER column can hold.
MAX_ID = 2**63 - 1


def error_response(
    status_code: int,
    message: str,
    headers: Optional[Mapping[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "fail", "error": message},
        headers=dict(headers) if headers else None,
    )


def validation_message(exc: RequestValidationError) -> str:
    """Render the first validation error as ``"<field>: <message>"``.

    The leading ``body``/``path``/``query`` location element is dropped.
    """
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    message = first.get("msg", "invalid value")
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


async def get_event_or_404(event_id: int) -> EventRead:
    event = await EventService.get(event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="event not found")
    return event


async def get_user_or_404(user_id: int) -> UserRead:
    user = await UserService.get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    return user


def require_owner(event: EventRead, user: UserRead) -> None:
    """Abort with 403 unless ``user`` owns ``event``."""
    if event.owner_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to modify this event",
        )
