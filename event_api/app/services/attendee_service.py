"""
Business logic for event attendance.

``AttendeeService`` manages the ``attendees`` join table.  The pair
``(event_id, user_id)`` is unique; handlers look it up first with
``get_by_event_and_attendee`` and the constraint catches the remaining
race between two concurrent inserts.
"""

import logging
import sqlite3
from typing import List, Optional

from event_api.app.core.db import get_cursor
from event_api.app.core.exceptions import DuplicateAttendeeError
from ..schemas.attendee import AttendeeRead
from ..schemas.user import UserRead

logger = logging.getLogger(__name__)


class AttendeeService:
    """Storage accessor for attendee rows."""

    @classmethod
    async def insert(cls, event_id: int, user_id: int) -> AttendeeRead:
        """Record that ``user_id`` attends ``event_id``.

        Raises ``DuplicateAttendeeError`` if the pairing already exists.
        Other constraint failures (e.g. a missing event) propagate as
        ``sqlite3.IntegrityError``.
        """
        try:
            with get_cursor() as cursor:
                cursor.execute(
                    "INSERT INTO attendees (user_id, event_id) VALUES (?, ?)",
                    (user_id, event_id),
                )
                attendee_id = cursor.lastrowid
        except sqlite3.IntegrityError as exc:
            if "UNIQUE" in str(exc):
                raise DuplicateAttendeeError(
                    f"User {user_id} already attends event {event_id}"
                ) from exc
            raise
        logger.info("Added user %s to event %s", user_id, event_id)
        return AttendeeRead(id=attendee_id, user_id=user_id, event_id=event_id)

    @classmethod
    async def get_by_event_and_attendee(cls, event_id: int, user_id: int) -> Optional[AttendeeRead]:
        """Return the attendee row for the pairing, or ``None``."""
        with get_cursor() as cursor:
            row = cursor.execute(
                "SELECT id, user_id, event_id FROM attendees WHERE event_id = ? AND user_id = ?",
                (event_id, user_id),
            ).fetchone()
        if row is None:
            return None
        return AttendeeRead(id=row["id"], user_id=row["user_id"], event_id=row["event_id"])

    @classmethod
    async def get_attendees_by_event(cls, event_id: int) -> List[UserRead]:
        """Return the users attending ``event_id``."""
        with get_cursor() as cursor:
            rows = cursor.execute(
                """
                SELECT u.id, u.email, u.name
                FROM users u
                JOIN attendees a ON u.id = a.user_id
                WHERE a.event_id = ?
                ORDER BY a.id
                """,
                (event_id,),
            ).fetchall()
        return [UserRead(id=row["id"], email=row["email"], name=row["name"]) for row in rows]

    @classmethod
    async def delete(cls, event_id: int, user_id: int) -> None:
        """Remove the pairing.  Removing an absent pairing is a no-op."""
        with get_cursor() as cursor:
            cursor.execute(
                "DELETE FROM attendees WHERE event_id = ? AND user_id = ?",
                (event_id, user_id),
            )
            removed = cursor.rowcount
        if removed:
            logger.info("Removed user %s from event %s", user_id, event_id)
