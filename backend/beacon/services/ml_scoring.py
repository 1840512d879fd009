"""Learned-preference bonus for a candidate."""

from beacon.schemas.preferences import LearnedPreferences
from beacon.services.profile_adapter import DEFAULT_PROFILE_TYPE, CandidateProfile

PROFILE_TYPE_WEIGHT = 15
INTEREST_WEIGHT = 5
ARCHETYPE_WEIGHT = 8
AGE_WEIGHT = 10
MAX_ML_SCORE = 20


def age_bucket(age: int) -> int:
    """Start of the 5-year bucket an age falls into (27 -> 25)."""
    return (age // 5) * 5


def ml_score(candidate: CandidateProfile, model: LearnedPreferences | None) -> float:
    """Bonus in [0, 20] from how well the candidate fits the learned weight maps.

    Terms accumulate before the final clamp, so a candidate overlapping on many
    interests reaches the ceiling quickly.
    """
    if model is None:
        return 0

    score = 0.0
    profile_type = candidate.profile_type or DEFAULT_PROFILE_TYPE
    score += model.profile_types.get(profile_type, 0) * PROFILE_TYPE_WEIGHT

    for interest in sorted(candidate.tags):
        score += model.interests.get(interest, 0) * INTEREST_WEIGHT

    for archetype in sorted(candidate.archetypes):
        score += model.archetypes.get(archetype, 0) * ARCHETYPE_WEIGHT

    if candidate.age:
        score += model.age_scores.get(str(age_bucket(candidate.age)), 0) * AGE_WEIGHT

    return max(0, min(MAX_ML_SCORE, score))
