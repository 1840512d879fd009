"""In-memory implementations of the store protocols for tests."""

from datetime import datetime
from typing import Iterable

from beacon.exceptions import StorageFailure
from beacon.repositories.base import INTERACTION_HISTORY_LIMIT
from beacon.schemas.interaction import InteractionEvent
from beacon.schemas.preferences import LearnedPreferences
from beacon.services.profile_adapter import CandidateProfile, to_candidate


def make_profile(email: str, **fields) -> CandidateProfile:
    return to_candidate({"email": email, **fields})


class InMemoryProfileStore:
    def __init__(self, profiles: Iterable[CandidateProfile] = (), blocks: dict[str, set[str]] | None = None):
        self.profiles = list(profiles)
        self.blocks = blocks or {}
        self.get_profiles_calls: list[list[str]] = []

    async def get_profile(self, email: str) -> CandidateProfile | None:
        return next((p for p in self.profiles if p.email == email), None)

    async def get_profiles(self, emails: Iterable[str]) -> list[CandidateProfile]:
        emails = list(emails)
        self.get_profiles_calls.append(emails)
        return [p for p in self.profiles if p.email in emails]

    async def list_visible_profiles(self, exclude_email: str) -> list[CandidateProfile]:
        return [p for p in self.profiles if p.email != exclude_email and p.photos]

    async def get_blocked_emails(self, email: str) -> set[str]:
        return set(self.blocks.get(email, set()))


class FailingProfileStore(InMemoryProfileStore):
    async def list_visible_profiles(self, exclude_email: str) -> list[CandidateProfile]:
        raise StorageFailure("list_visible_profiles")


class InMemoryInteractionStore:
    def __init__(self, events: Iterable[InteractionEvent] = ()):
        self.events = list(events)
        self.requested_limits: list[int] = []

    async def add_interaction(self, event: InteractionEvent) -> InteractionEvent:
        self.events.append(event)
        return event

    async def list_recent(self, email: str, limit: int = INTERACTION_HISTORY_LIMIT) -> list[InteractionEvent]:
        self.requested_limits.append(limit)
        mine = [e for e in self.events if e.user_email == email]
        mine.sort(key=lambda e: e.created_at, reverse=True)
        return mine[:limit]

    async def list_recently_active_users(self, since: datetime) -> list[str]:
        return sorted({e.user_email for e in self.events if e.created_at >= since})


class InMemoryPreferenceStore:
    def __init__(self, models: Iterable[LearnedPreferences] = ()):
        self.models = {m.user_email: m for m in models}
        self.upserts = 0

    async def get_preferences(self, email: str) -> LearnedPreferences | None:
        return self.models.get(email)

    async def upsert_preferences(self, model: LearnedPreferences) -> None:
        self.upserts += 1
        self.models[model.user_email] = model


class FailingPreferenceStore(InMemoryPreferenceStore):
    async def upsert_preferences(self, model: LearnedPreferences) -> None:
        raise StorageFailure("upsert_preferences")
