"""Auth API — login, token refresh, logout.

Learn: Routes for the token lifecycle:
- POST /api/login   → email/password → access token + refresh token
- POST /api/refresh → `Bearer <refresh token>` → new access token
- POST /api/revoke  → `Bearer <refresh token>` → token can't be redeemed again

Refresh does not rotate the refresh token. It stays valid, with its
original expiry, until it's revoked or runs out.
"""

from datetime import timedelta

import structlog
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.auth.bearer import MissingCredential, extract_bearer
from chirpy.auth.dependencies import get_refresh_store, get_settings, get_token_codec
from chirpy.auth.errors import InvalidCredentials, Unauthorized
from chirpy.auth.jwt import AccessTokenCodec
from chirpy.auth.refresh import RefreshTokenStore
from chirpy.config import Settings
from chirpy.db.engine import get_db
from chirpy.schemas.user import LoginResponse, RefreshResponse, UserCredentials
from chirpy.services.user_service import UserService

logger = structlog.get_logger()

router = APIRouter()


def _access_ttl(settings: Settings) -> timedelta:
    return timedelta(minutes=settings.access_token_expire_minutes)


def _refresh_token_from(request: Request) -> str:
    try:
        return extract_bearer(request.headers)
    except MissingCredential as e:
        raise Unauthorized() from e


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=LoginResponse)
async def login(
    body: UserCredentials,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    codec: AccessTokenCodec = Depends(get_token_codec),
    store: RefreshTokenStore = Depends(get_refresh_store),
):
    """Login with email and password → tokens."""
    svc = UserService(db, bcrypt_rounds=settings.bcrypt_rounds)
    user = await svc.check_credentials(body.email, body.password)
    if not user:
        logger.info("auth.login_failed")
        raise InvalidCredentials()

    token = codec.issue(user.id, _access_ttl(settings))
    refresh_token = await store.issue(user.id)
    logger.info("auth.login", user_id=str(user.id))

    return LoginResponse(
        id=user.id,
        created_at=user.created_at,
        updated_at=user.updated_at,
        email=user.email,
        is_chirpy_red=user.is_chirpy_red,
        token=token,
        refresh_token=refresh_token,
    )


# ─── Refresh ────────────────────────────────────────────


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(
    request: Request,
    settings: Settings = Depends(get_settings),
    codec: AccessTokenCodec = Depends(get_token_codec),
    store: RefreshTokenStore = Depends(get_refresh_store),
):
    """Exchange a refresh token for a new access token."""
    user_id = await store.redeem(_refresh_token_from(request))
    return RefreshResponse(token=codec.issue(user_id, _access_ttl(settings)))


# ─── Revoke ─────────────────────────────────────────────


@router.post("/revoke", status_code=204)
async def revoke(
    request: Request,
    store: RefreshTokenStore = Depends(get_refresh_store),
):
    """Revoke a refresh token. Unknown or already-revoked tokens are fine."""
    await store.revoke(_refresh_token_from(request))
    return Response(status_code=204)
