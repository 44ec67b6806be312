"""
Business logic for events.

``EventService`` wraps the ``events`` table and the join through
``attendees`` used to list the events a user attends.  Ownership is
not checked here; the route handlers compare the caller with
``owner_id`` before calling ``update`` or ``delete``.
"""

import logging
import sqlite3
from typing import List, Optional

from event_api.app.core.db import get_cursor
from event_api.app.core.exceptions import NoRowsAffectedError
from ..schemas.event import EventCreate, EventRead, EventUpdate

logger = logging.getLogger(__name__)

EVENT_COLUMNS = "e.id, e.owner_id, e.name, e.description, e.date, e.location"


def _row_to_event(row: sqlite3.Row) -> EventRead:
    return EventRead(
        id=row["id"],
        owner_id=row["owner_id"],
        name=row["name"],
        description=row["description"],
        date=row["date"],
        location=row["location"],
    )


class EventService:
    """Storage accessor for events."""

    @classmethod
    async def insert(cls, data: EventCreate, owner_id: int) -> EventRead:
        """Insert an event owned by ``owner_id`` and return it."""
        with get_cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO events (owner_id, name, description, date, location)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    owner_id,
                    data.name,
                    data.description,
                    data.date.isoformat(),
                    data.location,
                ),
            )
            event_id = cursor.lastrowid
        logger.info("User %s created event %s '%s'", owner_id, event_id, data.name)
        return EventRead(id=event_id, owner_id=owner_id, **data.model_dump())

    @classmethod
    async def get_all(cls) -> List[EventRead]:
        """Return every event ordered by id."""
        with get_cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {EVENT_COLUMNS} FROM events e ORDER BY e.id"
            ).fetchall()
        return [_row_to_event(row) for row in rows]

    @classmethod
    async def get(cls, event_id: int) -> Optional[EventRead]:
        """Retrieve a single event by ID, or ``None`` if it does not exist."""
        with get_cursor() as cursor:
            row = cursor.execute(
                f"SELECT {EVENT_COLUMNS} FROM events e WHERE e.id = ?",
                (event_id,),
            ).fetchone()
        if row is None:
            return None
        return _row_to_event(row)

    @classmethod
    async def update(cls, event_id: int, data: EventUpdate) -> EventRead:
        """Replace the editable fields of an event.

        Raises ``NoRowsAffectedError`` if the event does not exist.
        Returns the stored event, owner included.
        """
        with get_cursor() as cursor:
            cursor.execute(
                """
                UPDATE events
                SET name = ?, description = ?, date = ?, location = ?
                WHERE id = ?
                """,
                (
                    data.name,
                    data.description,
                    data.date.isoformat(),
                    data.location,
                    event_id,
                ),
            )
            if cursor.rowcount == 0:
                raise NoRowsAffectedError(f"Event {event_id} not found")
            row = cursor.execute(
                f"SELECT {EVENT_COLUMNS} FROM events e WHERE e.id = ?",
                (event_id,),
            ).fetchone()
        logger.info("Updated event %s", event_id)
        return _row_to_event(row)

    @classmethod
    async def delete(cls, event_id: int) -> None:
        """Delete an event.

        Attendee rows for the event are removed by the ``ON DELETE
        CASCADE`` foreign key.  Raises ``NoRowsAffectedError`` if the
        event does not exist.
        """
        with get_cursor() as cursor:
            cursor.execute("DELETE FROM events WHERE id = ?", (event_id,))
            if cursor.rowcount == 0:
                raise NoRowsAffectedError(f"Event {event_id} not found")
        logger.info("Deleted event %s", event_id)

    @classmethod
    async def get_by_attendee(cls, user_id: int) -> List[EventRead]:
        """Return the events ``user_id`` attends."""
        with get_cursor() as cursor:
            rows = cursor.execute(
                f"""
                SELECT {EVENT_COLUMNS}
                FROM events e
                JOIN attendees a ON e.id = a.event_id
                WHERE a.user_id = ?
                ORDER BY e.id
                """,
                (user_id,),
            ).fetchall()
        return [_row_to_event(row) for row in rows]
