"""
Pydantic models for user data.

Defines schemas for registering users, authenticating and reading user
information.  ``UserRead`` is the only representation that leaves the
API; it never carries the password hash.  ``UserInDB`` adds the hash
for the login check and stays internal.
"""

from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    email: EmailStr = Field(..., examples=["ann@example.com"])
    password: str = Field(..., min_length=8, examples=["password1"])
    name: str = Field(..., min_length=2, examples=["Ann"])


class UserLogin(BaseModel):
    email: EmailStr = Field(..., examples=["ann@example.com"])
    password: str = Field(..., min_length=1, examples=["password1"])


class UserRead(BaseModel):
    """Schema for reading a user from the API."""

    id: int
    email: str
    name: str

    model_config = {
        "from_attributes": True,
    }


class UserInDB(UserRead):
    password: str


class TokenResponse(BaseModel):
    token: str
