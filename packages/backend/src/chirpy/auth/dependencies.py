"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers to pull settings
and the token codec off app.state, and to authenticate the caller.

Two auth mechanisms:
1. Bearer JWT access token (users)
2. X-API-Key header (the Polka webhook, a trusted service, not a user)
"""

import uuid
from datetime import timedelta

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.auth.bearer import MissingCredential, api_key_matches, extract_api_key
from chirpy.auth.errors import Unauthorized
from chirpy.auth.guard import authenticate
from chirpy.auth.jwt import AccessTokenCodec
from chirpy.auth.refresh import RefreshTokenStore
from chirpy.config import Settings
from chirpy.db.engine import get_db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_codec(request: Request) -> AccessTokenCodec:
    return request.app.state.token_codec


def get_refresh_store(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> RefreshTokenStore:
    return RefreshTokenStore(
        db, lifetime=timedelta(days=settings.refresh_token_expire_days)
    )


async def get_current_user_id(
    request: Request,
    codec: AccessTokenCodec = Depends(get_token_codec),
) -> uuid.UUID:
    """Authenticated user id. Raises Unauthorized (401) otherwise."""
    return authenticate(request.headers, codec)


async def require_webhook_key(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject webhook calls that don't carry the configured Polka key."""
    try:
        key = extract_api_key(request.headers)
    except MissingCredential as e:
        raise Unauthorized() from e
    if not api_key_matches(key, settings.polka_key):
        raise Unauthorized()
