"""Interaction service — appends user-profile interaction events."""

import logging
import math
from datetime import datetime, timezone
from typing import Any

from beacon.exceptions import InvalidField, MissingRequiredField
from beacon.repositories.base import InteractionStore
from beacon.schemas.interaction import InteractionEvent

logger = logging.getLogger(__name__)


def _lift_number(metadata: dict[str, Any], *keys: str) -> float | None:
    """First present value among ``keys`` as a finite float; the offending key is reported."""
    for key in keys:
        value = metadata.get(key)
        if value is None:
            continue
        if isinstance(value, bool):
            raise InvalidField(key)
        try:
            number = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidField(key) from e
        if not math.isfinite(number):
            raise InvalidField(key)
        return number
    return None


class InteractionRecorder:
    """Records one interaction per call.

    Types are not checked against the learning weight table; unknown types are
    stored as given and simply carry no weight when preferences are learned.
    """

    def __init__(self, interaction_store: InteractionStore):
        self.interaction_store = interaction_store

    async def record(
        self,
        actor_email: str | None,
        target_email: str | None,
        interaction_type: str | None,
        metadata: dict[str, Any] | None = None,
    ) -> InteractionEvent:
        if not actor_email:
            raise MissingRequiredField("user_email")
        if not target_email:
            raise MissingRequiredField("target_email")
        if not interaction_type:
            raise MissingRequiredField("interaction_type")

        metadata = dict(metadata or {})
        duration = _lift_number(metadata, "durationSeconds", "duration_seconds")
        event = InteractionEvent(
            user_email=actor_email,
            target_email=target_email,
            interaction_type=interaction_type,
            created_at=datetime.now(timezone.utc),
            distance_km=_lift_number(metadata, "distanceKm", "distance_km"),
            lat=_lift_number(metadata, "lat"),
            lng=_lift_number(metadata, "lng"),
            duration_seconds=int(duration) if duration is not None else None,
            metadata=metadata,
        )

        stored = await self.interaction_store.add_interaction(event)
        logger.info("Recorded %s interaction %s -> %s", interaction_type, actor_email, target_email)
        return stored
