"""Admin endpoints. Only enabled when CHIRPY_PLATFORM=dev."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.auth.dependencies import get_settings
from chirpy.auth.errors import Forbidden
from chirpy.config import Settings
from chirpy.db.engine import get_db
from chirpy.services.user_service import UserService

router = APIRouter(prefix="/admin")


@router.post("/reset", response_class=PlainTextResponse)
async def reset(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Delete all users (and with them every chirp and refresh token)."""
    if settings.platform != "dev":
        raise Forbidden("reset is only available on the dev platform")
    deleted = await UserService(db).reset_all()
    return f"Reset OK: {deleted} users deleted"
