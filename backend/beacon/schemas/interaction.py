"""Pydantic schemas for recorded interactions."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class InteractionCreate(BaseModel):
    """Body of a record-interaction request.

    Fields are optional here so the recorder can report exactly which one is
    missing. ``interaction_type`` is a plain string: unknown types are stored
    as-is and only carry zero weight during learning.
    """

    target_email: str | None = None
    interaction_type: str | None = None
    metadata: dict[str, Any] | None = None


class InteractionEvent(BaseModel):
    """One stored interaction."""

    id: UUID | None = None
    user_email: str
    target_email: str
    interaction_type: str
    created_at: datetime
    distance_km: float | None = None
    lat: float | None = None
    lng: float | None = None
    duration_seconds: int | None = None
    metadata: dict[str, Any] = {}


class InteractionRecorded(BaseModel):
    success: bool = True
    interaction: InteractionEvent
