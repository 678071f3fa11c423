"""Chirp API routes.

Learn: Reads are public. Creating needs a valid access token, deleting
additionally needs ownership. Delete resolves in a fixed order:
401 (who are you?) → 404 (does it exist?) → 403 (is it yours?), so a
403 is only ever returned for a chirp that exists.
"""

import uuid
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.api.params import parse_uuid
from chirpy.auth.dependencies import get_current_user_id, get_settings
from chirpy.auth.guard import authorize_owner
from chirpy.config import Settings
from chirpy.db.engine import get_db
from chirpy.schemas.chirp import ChirpCreate, ChirpRead
from chirpy.services.chirp_service import ChirpService, ChirpValidationError

router = APIRouter(prefix="/chirps")


def _svc(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> ChirpService:
    return ChirpService(db, max_length=settings.max_chirp_length)


@router.post("", response_model=ChirpRead, status_code=201)
async def create_chirp(
    body: ChirpCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: ChirpService = Depends(_svc),
):
    try:
        return await svc.create_chirp(user_id, body.body)
    except ChirpValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("", response_model=list[ChirpRead])
async def list_chirps(
    author_id: Optional[str] = None,
    sort: Literal["asc", "desc"] = "asc",
    svc: ChirpService = Depends(_svc),
):
    """List chirps, oldest first. Filter with ?author_id=, reverse with ?sort=desc."""
    author = parse_uuid(author_id) if author_id else None
    return await svc.list_chirps(author_id=author, descending=sort == "desc")


@router.get("/{chirp_id}", response_model=ChirpRead)
async def get_chirp(chirp_id: str, svc: ChirpService = Depends(_svc)):
    chirp = await svc.get_chirp(parse_uuid(chirp_id))
    if not chirp:
        raise HTTPException(status_code=404, detail="Chirp not found")
    return chirp


@router.delete("/{chirp_id}", status_code=204)
async def delete_chirp(
    chirp_id: str,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: ChirpService = Depends(_svc),
):
    chirp = await svc.get_chirp(parse_uuid(chirp_id))
    if not chirp:
        raise HTTPException(status_code=404, detail="Chirp not found")
    authorize_owner(user_id, chirp.user_id)
    await svc.delete_chirp(chirp)
    return Response(status_code=204)
