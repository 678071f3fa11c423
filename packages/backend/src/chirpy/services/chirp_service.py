"""Chirp service — create, list, fetch and delete chirps.

Learn: Ownership is enforced by the caller (the route) with
authorize_owner(), after get_chirp() has confirmed the chirp exists.
This service never decides who may delete what.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.db.models import Chirp
from chirpy.services.profanity import clean_body

DEFAULT_MAX_LENGTH = 140


class ChirpValidationError(Exception):
    pass


class ChirpService:
    def __init__(self, db: AsyncSession, *, max_length: int = DEFAULT_MAX_LENGTH):
        self.db = db
        self.max_length = max_length

    async def create_chirp(self, user_id: uuid.UUID, body: str) -> Chirp:
        """Clean and store a chirp. Raises ChirpValidationError if empty or too long."""
        if not body.strip():
            raise ChirpValidationError("Chirp is empty")
        cleaned = clean_body(body)
        if len(cleaned) > self.max_length:
            raise ChirpValidationError("Chirp is too long")

        chirp = Chirp(body=cleaned, user_id=user_id)
        self.db.add(chirp)
        await self.db.commit()
        await self.db.refresh(chirp)
        return chirp

    async def list_chirps(
        self,
        *,
        author_id: Optional[uuid.UUID] = None,
        descending: bool = False,
    ) -> list[Chirp]:
        q = select(Chirp)
        if author_id:
            q = q.where(Chirp.user_id == author_id)
        order = Chirp.created_at.desc() if descending else Chirp.created_at.asc()
        q = q.order_by(order)
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def get_chirp(self, chirp_id: uuid.UUID) -> Optional[Chirp]:
        return await self.db.get(Chirp, chirp_id)

    async def delete_chirp(self, chirp: Chirp) -> None:
        await self.db.delete(chirp)
        await self.db.commit()
