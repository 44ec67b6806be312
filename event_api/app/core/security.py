"""
Security helpers for password hashing and JWT authentication.

Passwords are hashed with bcrypt; the cost factor comes from
``settings.bcrypt_rounds``.  Access tokens are HS256 JSON Web Tokens
carrying the user id (``userId``) and an expiration timestamp
(``exp``), signed with ``settings.jwt_secret``.  Clients send them in
the ``Authorization`` header as ``Bearer <token>``.

``get_current_user`` is the FastAPI dependency that protects routes.
It re-verifies the token on every request and hands the resolved user
to the handler; there is no server-side session.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .exceptions import MalformedHashError, TokenError, TokenExpiredError
from .helpers import MAX_ID
from ..schemas.user import UserRead
from ..services.user_service import UserService

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password.
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash a password with a fresh bcrypt salt.

    Parameters
    ----------
    password : str
        The plain text password to hash.

    Returns
    -------
    str
        The bcrypt hash in modular crypt format (``$2b$...``).
    """
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(hashed_password: str, plain_password: str) -> bool:
    """Check a plain password against a stored bcrypt hash.

    Returns ``False`` when the password does not match.  A stored value
    that is not a bcrypt hash raises ``MalformedHashError`` instead, so
    callers can tell a wrong password from corrupt data.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError as exc:
        raise MalformedHashError("stored password hash is malformed") from exc


def create_access_token(
    user_id: int,
    secret: Optional[str] = None,
    ttl: Optional[timedelta] = None,
) -> str:
    """Create a signed JWT for ``user_id``.

    Parameters
    ----------
    user_id : int
        Identifier embedded as the ``userId`` claim.
    secret : Optional[str]
        Signing key.  Defaults to ``settings.jwt_secret``.
    ttl : Optional[timedelta]
        Lifetime of the token.  Defaults to
        ``settings.access_token_expire_hours``.

    Returns
    -------
    str
        The encoded token.
    """
    if ttl is None:
        ttl = timedelta(hours=settings.access_token_expire_hours)
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "userId": user_id,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, secret: Optional[str] = None) -> Dict[str, Any]:
    """Verify a JWT and return its claims.

    The signature must match ``secret``, the header must name the
    configured algorithm and the token must not be expired.  ``userId``
    and ``exp`` are mandatory claims.

    Raises
    ------
    TokenExpiredError
        The token is past its ``exp``.
    TokenError
        Any other verification failure.
    """
    try:
        claims = jwt.decode(
            token,
            secret or settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "userId"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError("token has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenError(str(exc)) from exc
    user_id = claims["userId"]
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise TokenError("userId claim must be an integer")
    if not 0 < user_id <= MAX_ID:
        raise TokenError("userId claim is out of range")
    return claims


security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> UserRead:
    """Dependency that resolves the bearer token to a user.

    Missing or malformed ``Authorization`` headers and tokens that fail
    verification are rejected with 401.  A valid token whose user no
    longer exists is rejected with 404.
    """
    if credentials is None:
        if "authorization" not in request.headers:
            raise _unauthorized("Authorization header missing")
        raise _unauthorized("Bearer token not set")

    try:
        claims = decode_access_token(credentials.credentials)
    except TokenExpiredError:
        raise _unauthorized("Token has expired")
    except TokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise _unauthorized("Invalid token")

    user = await UserService.get(claims["userId"])
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    return user
