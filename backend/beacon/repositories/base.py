"""Storage interfaces consumed by the ranking and learning services.

Services receive these through their constructors; the SQLAlchemy
implementations live in ``beacon.repositories.sql``.
"""

from datetime import datetime
from typing import Iterable, Protocol

from beacon.schemas.interaction import InteractionEvent
from beacon.schemas.preferences import LearnedPreferences
from beacon.services.profile_adapter import CandidateProfile

INTERACTION_HISTORY_LIMIT = 500


class ProfileStore(Protocol):
    async def get_profile(self, email: str) -> CandidateProfile | None: ...

    async def get_profiles(self, emails: Iterable[str]) -> list[CandidateProfile]: ...

    async def list_visible_profiles(self, exclude_email: str) -> list[CandidateProfile]:
        """Onboarded profiles with photos, excluding ``exclude_email``, in a stable order."""
        ...

    async def get_blocked_emails(self, email: str) -> set[str]: ...


class InteractionStore(Protocol):
    async def add_interaction(self, event: InteractionEvent) -> InteractionEvent: ...

    async def list_recent(self, email: str, limit: int = INTERACTION_HISTORY_LIMIT) -> list[InteractionEvent]:
        """Most recent interactions performed by ``email``, newest first."""
        ...

    async def list_recently_active_users(self, since: datetime) -> list[str]: ...


class PreferenceStore(Protocol):
    async def get_preferences(self, email: str) -> LearnedPreferences | None: ...

    async def upsert_preferences(self, model: LearnedPreferences) -> None:
        """Replace the stored model for ``model.user_email``."""
        ...
