"""Polka webhook receiver.

Learn: Polka (the payment provider) calls us when a user pays for
Chirpy Red. It authenticates with a shared key in X-API-Key, a
service credential, checked before the body is even looked at.
Events other than user.upgraded are acknowledged and ignored.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession

from chirpy.api.params import parse_uuid
from chirpy.auth.dependencies import require_webhook_key
from chirpy.db.engine import get_db
from chirpy.schemas.chirp import PolkaEvent
from chirpy.services.user_service import UserNotFoundError, UserService

logger = structlog.get_logger()

router = APIRouter(prefix="/polka")

USER_UPGRADED = "user.upgraded"


@router.post("/webhooks", status_code=204, dependencies=[Depends(require_webhook_key)])
async def receive_polka_webhook(body: PolkaEvent, db: AsyncSession = Depends(get_db)):
    if body.event != USER_UPGRADED:
        logger.info("webhooks.ignored", polka_event=body.event)
        return Response(status_code=204)

    user_id = parse_uuid(body.data.user_id)
    try:
        await UserService(db).upgrade_to_red(user_id)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    return Response(status_code=204)
