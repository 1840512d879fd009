"""Pydantic schemas package."""

from beacon.schemas.interaction import (
    InteractionCreate,
    InteractionEvent,
    InteractionRecorded,
)
from beacon.schemas.preferences import (
    LearnedPreferences,
    LearnResponse,
    PreferenceSummary,
)
from beacon.schemas.recommendation import (
    MAX_PAGE_SIZE,
    RecommendationPage,
    RecommendationParams,
    RecommendedProfile,
    ScoreBreakdown,
)

__all__ = [
    # Interaction
    "InteractionCreate",
    "InteractionEvent",
    "InteractionRecorded",
    # Preferences
    "LearnedPreferences",
    "LearnResponse",
    "PreferenceSummary",
    # Recommendation
    "MAX_PAGE_SIZE",
    "RecommendationPage",
    "RecommendationParams",
    "RecommendedProfile",
    "ScoreBreakdown",
]
