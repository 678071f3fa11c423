"""Pydantic schemas for chirps and the Polka webhook."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ChirpCreate(BaseModel):
    body: str


class ChirpRead(BaseModel):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    body: str
    user_id: uuid.UUID

    model_config = {"from_attributes": True}


# ─── Polka webhook ──────────────────────────────────────

class PolkaData(BaseModel):
    user_id: str = ""


class PolkaEvent(BaseModel):
    event: str
    data: PolkaData = Field(default_factory=PolkaData)
