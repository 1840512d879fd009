"""Pydantic schemas for learned preference models."""

from datetime import datetime

from pydantic import BaseModel


class LearnedPreferences(BaseModel):
    """A user's learned preference model.

    The four weight maps are normalized to [-1, 1]. ``age_scores`` is keyed by
    the 5-year bucket start as a string ("25", "30", ...) to match its JSONB form.
    """

    user_email: str
    preferred_age_range: tuple[int, int] | None = None
    preferred_distance_km: int | None = None
    preferred_profile_types: list[str] = []
    preferred_interests: list[str] = []
    preferred_archetypes: list[str] = []
    profile_types: dict[str, float] = {}
    interests: dict[str, float] = {}
    archetypes: dict[str, float] = {}
    age_scores: dict[str, float] = {}
    interaction_count: int = 0
    last_updated: datetime | None = None


class PreferenceSummary(BaseModel):
    """Trimmed view of a learned model returned to the client."""

    preferred_age_range: tuple[int, int] | None = None
    preferred_distance_km: int | None = None
    preferred_profile_types: list[str]
    preferred_interests: list[str]
    preferred_archetypes: list[str]
    interaction_count: int

    @classmethod
    def from_model(cls, model: LearnedPreferences) -> "PreferenceSummary":
        return cls(
            preferred_age_range=model.preferred_age_range,
            preferred_distance_km=model.preferred_distance_km,
            preferred_profile_types=model.preferred_profile_types,
            preferred_interests=model.preferred_interests[:10],
            preferred_archetypes=model.preferred_archetypes[:5],
            interaction_count=model.interaction_count,
        )


class LearnResponse(BaseModel):
    success: bool = True
    message: str
    preferences: PreferenceSummary | None = None
