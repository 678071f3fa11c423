"""User API — registration and credential update.

- POST /api/users → create an account (no tokens; log in next)
- PUT  /api/users → change own email and password (bearer auth)
"""

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.auth.dependencies import get_current_user_id, get_settings
from chirpy.auth.errors import Unauthorized
from chirpy.config import Settings
from chirpy.db.engine import get_db
from chirpy.schemas.user import UserCredentials, UserRead
from chirpy.services.user_service import EmailTakenError, UserNotFoundError, UserService

router = APIRouter(prefix="/users")


def _svc(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(db, bcrypt_rounds=settings.bcrypt_rounds)


@router.post("", response_model=UserRead, status_code=201)
async def create_user(body: UserCredentials, svc: UserService = Depends(_svc)):
    try:
        return await svc.create_user(body.email, body.password)
    except EmailTakenError:
        raise HTTPException(status_code=409, detail="Email already registered")


@router.put("", response_model=UserRead)
async def update_user(
    body: UserCredentials,
    user_id: uuid.UUID = Depends(get_current_user_id),
    svc: UserService = Depends(_svc),
):
    """Update the caller's own email and password."""
    try:
        return await svc.update_credentials(user_id, body.email, body.password)
    except EmailTakenError:
        raise HTTPException(status_code=409, detail="Email already registered")
    except UserNotFoundError:
        # Token outlived its user (e.g. after an admin reset)
        raise Unauthorized()
