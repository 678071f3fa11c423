"""Refresh token lifecycle.

Learn: Refresh tokens are opaque random strings, persisted in the
refresh_tokens table. The state machine is small:

    issued ──(logout / revoke)──▶ revoked
       │
       └──(expires_at passes)──▶ expired

Only an issued, unexpired, unrevoked token can be redeemed, and
redeeming is read-only: it never touches expires_at, so two concurrent
refreshes can't extend a token and there is nothing to lock.

Each operation is one SQL statement. A cancelled request can't leave a
row half-updated.
"""

import secrets
import uuid
from datetime import timedelta

import structlog
from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.auth.errors import RefreshTokenNotFound
from chirpy.auth.jwt import Clock, utc_clock
from chirpy.db.models import RefreshToken

logger = structlog.get_logger()

DEFAULT_LIFETIME = timedelta(days=60)
TOKEN_BYTES = 32  # 256 bits → 64 hex chars


def generate_refresh_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


class RefreshTokenStore:
    """Issue, redeem and revoke refresh tokens for one DB session."""

    def __init__(
        self,
        db: AsyncSession,
        *,
        lifetime: timedelta = DEFAULT_LIFETIME,
        clock: Clock = utc_clock,
    ):
        self.db = db
        self.lifetime = lifetime
        self.clock = clock

    async def issue(self, user_id: uuid.UUID) -> str:
        """Persist a new token for user_id and return it.

        This is the only time the raw value is handed out.
        """
        token = generate_refresh_token()
        now = self.clock()
        await self.db.execute(
            insert(RefreshToken).values(
                token=token,
                user_id=user_id,
                created_at=now,
                updated_at=now,
                expires_at=now + self.lifetime,
            )
        )
        await self.db.commit()
        logger.info("auth.refresh_token_issued", user_id=str(user_id))
        return token

    async def redeem(self, token: str) -> uuid.UUID:
        """Return the owner of a redeemable token.

        Unknown, expired and revoked tokens all raise the same
        RefreshTokenNotFound, so the response can't be used to tell
        which tokens exist.
        """
        result = await self.db.execute(
            select(RefreshToken.user_id).where(
                RefreshToken.token == token,
                RefreshToken.revoked_at.is_(None),
                RefreshToken.expires_at > self.clock(),
            )
        )
        user_id = result.scalar_one_or_none()
        if user_id is None:
            raise RefreshTokenNotFound("no redeemable refresh token")
        return user_id

    async def revoke(self, token: str) -> None:
        """Mark a token revoked. Idempotent.

        Already-revoked rows keep their original revoked_at; unknown
        tokens are silently ignored.
        """
        now = self.clock()
        result = await self.db.execute(
            update(RefreshToken)
            .where(RefreshToken.token == token, RefreshToken.revoked_at.is_(None))
            .values(revoked_at=now, updated_at=now)
        )
        await self.db.commit()
        if result.rowcount:
            logger.info("auth.refresh_token_revoked")
