"""Pydantic schemas for users and auth responses.

Learn: Pydantic v2 models validate request/response data. Separate
input schemas from "Read" schemas (output) so the password hash can
never end up in a response.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    """Body of register, login and update."""
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    email: str
    is_chirpy_red: bool

    model_config = {"from_attributes": True}


class LoginResponse(UserRead):
    """User plus a fresh access token and refresh token."""
    token: str
    refresh_token: str


class RefreshResponse(BaseModel):
    token: str
