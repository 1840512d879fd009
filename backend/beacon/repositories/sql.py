"""SQLAlchemy-backed stores for profiles, interactions and learned preferences."""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterable, Iterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from beacon.exceptions import StorageFailure
from beacon.models.learned_preference import LearnedPreference
from beacon.models.user_block import UserBlock
from beacon.models.user_interaction import UserInteraction
from beacon.models.user_profile import UserProfile
from beacon.repositories.base import INTERACTION_HISTORY_LIMIT
from beacon.schemas.interaction import InteractionEvent
from beacon.schemas.preferences import LearnedPreferences
from beacon.services.profile_adapter import CandidateProfile, to_candidate

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Storage operation failed: %s", operation)
        raise StorageFailure(operation) from e


def format_age_range(age_range: tuple[int, int] | None) -> str | None:
    """Render an age range as half-open interval text: (25, 35) -> "[25,35)"."""
    if age_range is None:
        return None
    return f"[{age_range[0]},{age_range[1]})"


def parse_age_range(value: str | None) -> tuple[int, int] | None:
    if not value:
        return None
    low, high = value.strip("[]()").split(",")
    return int(low), int(high)


class SqlProfileStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, email: str) -> CandidateProfile | None:
        with _storage_errors("get_profile"):
            result = await self.db.execute(select(UserProfile).where(UserProfile.email == email))
            row = result.scalar_one_or_none()
        return to_candidate(row) if row else None

    async def get_profiles(self, emails: Iterable[str]) -> list[CandidateProfile]:
        emails = list(emails)
        if not emails:
            return []
        with _storage_errors("get_profiles"):
            result = await self.db.execute(select(UserProfile).where(UserProfile.email.in_(emails)))
            rows = result.scalars().all()
        return [to_candidate(row) for row in rows]

    async def list_visible_profiles(self, exclude_email: str) -> list[CandidateProfile]:
        with _storage_errors("list_visible_profiles"):
            result = await self.db.execute(
                select(UserProfile)
                .where(
                    UserProfile.email != exclude_email,
                    UserProfile.onboarding_complete == True,  # noqa: E712
                    UserProfile.photos.isnot(None),
                )
                .order_by(UserProfile.created_at, UserProfile.email)
            )
            rows = result.scalars().all()
        return [to_candidate(row) for row in rows]

    async def get_blocked_emails(self, email: str) -> set[str]:
        with _storage_errors("get_blocked_emails"):
            result = await self.db.execute(
                select(UserBlock.blocked_email).where(UserBlock.user_email == email)
            )
            return {row[0] for row in result}


class SqlInteractionStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _to_event(row: UserInteraction) -> InteractionEvent:
        return InteractionEvent(
            id=row.id,
            user_email=row.user_email,
            target_email=row.target_email,
            interaction_type=row.interaction_type,
            created_at=row.created_at,
            distance_km=row.distance_km,
            lat=row.lat,
            lng=row.lng,
            duration_seconds=row.duration_seconds,
            metadata=row.extra_data or {},
        )

    async def add_interaction(self, event: InteractionEvent) -> InteractionEvent:
        row = UserInteraction(
            id=event.id or uuid.uuid4(),
            user_email=event.user_email,
            target_email=event.target_email,
            interaction_type=event.interaction_type,
            created_at=event.created_at,
            distance_km=event.distance_km,
            lat=event.lat,
            lng=event.lng,
            duration_seconds=event.duration_seconds,
            extra_data=event.metadata,
        )
        with _storage_errors("add_interaction"):
            self.db.add(row)
            await self.db.flush()
        return self._to_event(row)

    async def list_recent(self, email: str, limit: int = INTERACTION_HISTORY_LIMIT) -> list[InteractionEvent]:
        with _storage_errors("list_recent_interactions"):
            result = await self.db.execute(
                select(UserInteraction)
                .where(UserInteraction.user_email == email)
                .order_by(UserInteraction.created_at.desc())
                .limit(limit)
            )
            rows = result.scalars().all()
        return [self._to_event(row) for row in rows]

    async def list_recently_active_users(self, since: datetime) -> list[str]:
        with _storage_errors("list_recently_active_users"):
            result = await self.db.execute(
                select(UserInteraction.user_email)
                .where(UserInteraction.created_at >= since)
                .distinct()
                .order_by(UserInteraction.user_email)
            )
            return list(result.scalars().all())


class SqlPreferenceStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_preferences(self, email: str) -> LearnedPreferences | None:
        with _storage_errors("get_preferences"):
            result = await self.db.execute(
                select(LearnedPreference).where(LearnedPreference.user_email == email)
            )
            row = result.scalar_one_or_none()
        if not row:
            return None

        weights = row.interaction_weights or {}
        return LearnedPreferences(
            user_email=row.user_email,
            preferred_age_range=parse_age_range(row.preferred_age_range),
            preferred_distance_km=row.preferred_distance_km,
            preferred_profile_types=row.preferred_profile_types or [],
            preferred_interests=row.preferred_interests or [],
            preferred_archetypes=row.preferred_archetypes or [],
            profile_types=weights.get("profile_types", {}),
            interests=weights.get("interests", {}),
            archetypes=weights.get("archetypes", {}),
            age_scores=weights.get("age_scores", {}),
            interaction_count=row.interaction_count,
            last_updated=row.last_updated,
        )

    async def upsert_preferences(self, model: LearnedPreferences) -> None:
        """Replace the stored model for the user, creating the row on first learn."""
        with _storage_errors("upsert_preferences"):
            result = await self.db.execute(
                select(LearnedPreference).where(LearnedPreference.user_email == model.user_email)
            )
            row = result.scalar_one_or_none()
            if not row:
                row = LearnedPreference(user_email=model.user_email)
                self.db.add(row)

            row.preferred_age_range = format_age_range(model.preferred_age_range)
            row.preferred_distance_km = model.preferred_distance_km
            row.preferred_profile_types = model.preferred_profile_types
            row.preferred_interests = model.preferred_interests
            row.preferred_archetypes = model.preferred_archetypes
            row.interaction_weights = {
                "profile_types": model.profile_types,
                "interests": model.interests,
                "archetypes": model.archetypes,
                "age_scores": model.age_scores,
            }
            row.interaction_count = model.interaction_count
            row.last_updated = model.last_updated or datetime.now(timezone.utc)
            await self.db.flush()
