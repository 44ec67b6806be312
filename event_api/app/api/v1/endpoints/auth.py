"""
Registration and login endpoints for API v1.

``/register`` stores a new user with a bcrypt hash of the password and
returns the user without any credential fields.  ``/login`` checks the
password and returns a signed access token valid for
``settings.access_token_expire_hours``.
"""

import logging
import sqlite3

import jwt
from fastapi import APIRouter, HTTPException, status

from event_api.app.core.exceptions import MalformedHashError
from event_api.app.core.security import create_access_token, hash_password, verify_password
from event_api.app.schemas.user import TokenResponse, UserCreate, UserLogin, UserRead
from event_api.app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate) -> UserRead:
    """Register a new user.

    The e‑mail must be unique.  A duplicate is reported as a generic
    server error, matching any other failed insert.
    """
    hashed = hash_password(user.password)
    try:
        return await UserService.insert(user, hashed)
    except sqlite3.IntegrityError as e:
        logger.warning("Registration failed for %s: %s", user.email, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong",
        ) from e


@router.post("/login", response_model=TokenResponse)
async def login_user(credentials: UserLogin) -> TokenResponse:
    """Authenticate a user and return a bearer token.

    Unknown e‑mail addresses yield 404 and wrong passwords 401.
    """
    db_user = await UserService.get_by_email(credentials.email)
    if db_user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")

    try:
        matches = verify_password(db_user.password, credentials.password)
    except MalformedHashError as e:
        logger.error("User %s has a malformed password hash", db_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Something went wrong",
        ) from e
    if not matches:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    try:
        token = create_access_token(db_user.id)
    except jwt.PyJWTError as e:
        logger.error("Could not sign token for user %s: %s", db_user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="error generating token",
        ) from e
    return TokenResponse(token=token)
