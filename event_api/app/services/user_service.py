"""
Business logic for users.

``UserService`` wraps the ``users`` table.  Passwords arrive already
hashed; hashing happens in the register endpoint via
``core.security.hash_password``.
"""

import logging
from typing import Optional

from event_api.app.core.db import get_cursor
from ..schemas.user import UserCreate, UserInDB, UserRead

logger = logging.getLogger(__name__)


class UserService:
    """Storage accessor for users.

    Users are created at registration and read for login, for the
    authentication dependency and for attendee checks.  They are never
    updated or deleted through the API.
    """

    @classmethod
    async def insert(cls, data: UserCreate, hashed_password: str) -> UserRead:
        """Insert a user and return it with the generated id.

        A duplicate e‑mail violates the ``UNIQUE`` constraint and
        propagates as ``sqlite3.IntegrityError``.
        """
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO users (email, name, password) VALUES (?, ?, ?)",
                (data.email, data.name, hashed_password),
            )
            user_id = cursor.lastrowid
        logger.info("Registered user %s (id=%s)", data.email, user_id)
        return UserRead(id=user_id, email=data.email, name=data.name)

    @classmethod
    async def get(cls, user_id: int) -> Optional[UserRead]:
        """Retrieve a user by ID, or ``None`` if it does not exist."""
        with get_cursor() as cursor:
            row = cursor.execute(
                "SELECT id, email, name FROM users WHERE id = ?",
                (user_id,),
            ).fetchone()
        if row is None:
            return None
        return UserRead(id=row["id"], email=row["email"], name=row["name"])

    @classmethod
    async def get_by_email(cls, email: str) -> Optional[UserInDB]:
        """Retrieve a user together with the password hash for login."""
        with get_cursor() as cursor:
            row = cursor.execute(
                "SELECT id, email, name, password FROM users WHERE email = ?",
                (email,),
            ).fetchone()
        if row is None:
            return None
        return UserInDB(
            id=row["id"],
            email=row["email"],
            name=row["name"],
            password=row["password"],
        )
