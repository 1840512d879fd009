"""Preference learning service — builds a user's preference model from their interaction history."""

import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Mapping, Sequence

from beacon.repositories.base import (
    INTERACTION_HISTORY_LIMIT,
    InteractionStore,
    PreferenceStore,
    ProfileStore,
)
from beacon.schemas.interaction import InteractionEvent
from beacon.schemas.preferences import LearnedPreferences
from beacon.services.attribute_scoring import round_half_up
from beacon.services.ml_scoring import age_bucket
from beacon.services.profile_adapter import CandidateProfile

logger = logging.getLogger(__name__)

# Signal weights per interaction type; unknown types weigh 0
INTERACTION_WEIGHTS = {
    "view": 0.1,
    "like": 1.0,
    "message": 1.5,
    "meet": 2.0,
    "save": 0.8,
    "skip": -0.3,
    "block": -2.0,
}

# Per-day multiplier applied to older interactions
DECAY_FACTOR = 0.98

PROFILE_TYPE_THRESHOLD = 0.3
AGE_THRESHOLD = 0.3
INTEREST_THRESHOLD = 0.2
ARCHETYPE_THRESHOLD = 0.2
TOP_INTERESTS = 20
TOP_ARCHETYPES = 10

SECONDS_PER_DAY = 86400


def decayed_weight(interaction_type: str, created_at: datetime, now: datetime) -> float:
    """Type weight scaled by DECAY_FACTOR ** days since the interaction (fractional days)."""
    weight = INTERACTION_WEIGHTS.get(interaction_type, 0)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    days_since = (now - created_at).total_seconds() / SECONDS_PER_DAY
    return weight * DECAY_FACTOR ** days_since


def normalize_scores(scores: Mapping[str, float]) -> dict[str, float]:
    """Scale a map so its largest magnitude is at most 1.

    The divisor is never below 1, so maps of weak signals are left as-is
    rather than inflated.
    """
    if not scores:
        return {}
    divisor = max(1.0, max(abs(v) for v in scores.values()))
    return {k: v / divisor for k, v in scores.items()}


def _top_keys(scores: Mapping[str, float], n: int, threshold: float) -> list[str]:
    # Truncate to n first, then filter
    ranked = sorted(scores.items(), key=lambda kv: kv[1], reverse=True)[:n]
    return [k for k, v in ranked if v > threshold]


def build_preference_model(
    user_email: str,
    interactions: Sequence[InteractionEvent],
    profiles: Mapping[str, CandidateProfile],
    now: datetime,
) -> LearnedPreferences | None:
    """Aggregate an interaction history into a normalized preference model.

    Pure function of its inputs. Returns None when no interaction target could
    be resolved to a profile.
    """
    if not interactions or not profiles:
        return None

    profile_types: dict[str, float] = defaultdict(float)
    interests: dict[str, float] = defaultdict(float)
    archetypes: dict[str, float] = defaultdict(float)
    age_scores: dict[str, float] = defaultdict(float)
    distance_sum = 0.0
    distance_count = 0

    for interaction in interactions:
        profile = profiles.get(interaction.target_email)
        if profile is None:
            continue

        weight = INTERACTION_WEIGHTS.get(interaction.interaction_type, 0)
        decayed = decayed_weight(interaction.interaction_type, interaction.created_at, now)

        # Untyped targets say nothing about preferred type
        if profile.profile_type:
            profile_types[profile.profile_type] += decayed

        for interest in sorted(profile.tags):
            interests[interest] += decayed

        for archetype in sorted(profile.archetypes):
            archetypes[archetype] += decayed

        if profile.age:
            age_scores[str(age_bucket(profile.age))] += decayed

        # Only positive signals say anything about preferred distance
        if interaction.distance_km is not None and weight > 0:
            distance_sum += interaction.distance_km * decayed
            distance_count += 1

    profile_types = normalize_scores(profile_types)
    interests = normalize_scores(interests)
    archetypes = normalize_scores(archetypes)
    age_scores = normalize_scores(age_scores)

    preferred_age_range = None
    liked_buckets = [int(k) for k, v in age_scores.items() if v > AGE_THRESHOLD]
    if liked_buckets:
        preferred_age_range = (min(liked_buckets), max(liked_buckets) + 5)

    preferred_distance_km = None
    if distance_count and distance_sum > 0:
        preferred_distance_km = round_half_up(distance_sum / distance_count)

    return LearnedPreferences(
        user_email=user_email,
        preferred_age_range=preferred_age_range,
        preferred_distance_km=preferred_distance_km,
        preferred_profile_types=[k for k, v in profile_types.items() if v > PROFILE_TYPE_THRESHOLD],
        preferred_interests=_top_keys(interests, TOP_INTERESTS, INTEREST_THRESHOLD),
        preferred_archetypes=_top_keys(archetypes, TOP_ARCHETYPES, ARCHETYPE_THRESHOLD),
        profile_types=profile_types,
        interests=interests,
        archetypes=archetypes,
        age_scores=age_scores,
        interaction_count=len(interactions),
        last_updated=now,
    )


class PreferenceLearner:
    """Recomputes and persists one user's preference model.

    Runs for different users are independent. Two concurrent runs for the same
    user are not serialized; the later upsert replaces the earlier one.
    """

    def __init__(
        self,
        interaction_store: InteractionStore,
        profile_store: ProfileStore,
        preference_store: PreferenceStore,
    ):
        self.interaction_store = interaction_store
        self.profile_store = profile_store
        self.preference_store = preference_store

    async def learn(self, user_email: str, now: datetime | None = None) -> LearnedPreferences | None:
        now = now or datetime.now(timezone.utc)

        interactions = await self.interaction_store.list_recent(user_email, INTERACTION_HISTORY_LIMIT)
        if not interactions:
            logger.debug("No interactions for %s, skipping preference learning", user_email)
            return None

        target_emails = list(dict.fromkeys(i.target_email for i in interactions))
        resolved = await self.profile_store.get_profiles(target_emails)
        profiles = {p.email: p for p in resolved}

        model = build_preference_model(user_email, interactions, profiles, now)
        if model is None:
            logger.debug("No interaction targets resolved for %s", user_email)
            return None

        await self.preference_store.upsert_preferences(model)
        logger.info(
            "Learned preferences for %s from %d interactions (%d interests, %d profile types)",
            user_email, len(interactions), len(model.preferred_interests), len(model.preferred_profile_types),
        )
        return model
