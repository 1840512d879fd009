"""Attribute scorers — interest overlap, activity recency, completeness, compatibility.

All scorers are total over their inputs: missing optional data maps to a
documented default score instead of raising.
"""

import math
from datetime import datetime, timezone
from typing import Iterable

from beacon.services.profile_adapter import CandidateProfile

NEUTRAL_INTEREST_SCORE = 12
MAX_INTEREST_SCORE = 25

UNKNOWN_ACTIVITY_SCORE = 5
# (exclusive upper bound in minutes since last seen, score)
ACTIVITY_BUCKETS = (
    (5, 15),       # active right now
    (15, 14),      # just active
    (60, 12),      # last hour
    (360, 10),     # today
    (1440, 7),     # last 24h
    (10080, 4),    # last week
)
INACTIVE_SCORE = 2

MAX_COMPLETENESS_SCORE = 10

BASE_COMPATIBILITY_SCORE = 10
ESSENTIAL_BONUS = 3
DEALBREAKER_PENALTY = 10
MAX_COMPATIBILITY_SCORE = 20


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (12.5 -> 13), unlike round()."""
    return math.floor(value + 0.5)


def interest_score(viewer_tags: Iterable[str] | None, candidate_tags: Iterable[str] | None) -> int:
    """Share of the viewer's interests the candidate also has, scaled to 0-25.

    Normalized by the viewer's interest count rather than the union, so viewers
    with few interests are easier to match fully.
    """
    viewer = {str(t).lower() for t in viewer_tags or ()}
    candidate = {str(t).lower() for t in candidate_tags or ()}
    if not viewer or not candidate:
        return NEUTRAL_INTEREST_SCORE

    overlap = len(viewer & candidate)
    return round_half_up(overlap / len(viewer) * MAX_INTEREST_SCORE)


def activity_score(last_seen: datetime | None, now: datetime | None = None) -> int:
    if last_seen is None:
        return UNKNOWN_ACTIVITY_SCORE

    now = now or datetime.now(timezone.utc)
    if last_seen.tzinfo is None:
        last_seen = last_seen.replace(tzinfo=timezone.utc)
    minutes_ago = (now - last_seen).total_seconds() / 60

    for upper, score in ACTIVITY_BUCKETS:
        if minutes_ago < upper:
            return score
    return INACTIVE_SCORE


def completeness_score(profile: CandidateProfile) -> int:
    score = 0
    if len(profile.photos) > 0:
        score += 3
    if len(profile.photos) > 2:
        score += 1
    if len(profile.bio) > 20:
        score += 2
    if profile.tags:
        score += 1
    if profile.looking_for:
        score += 1
    if profile.city:
        score += 1
    if profile.is_verified:
        score += 1
    return min(score, MAX_COMPLETENESS_SCORE)


def compatibility_score(viewer: CandidateProfile, candidate: CandidateProfile) -> int:
    """Score the candidate against the viewer's essentials and dealbreakers (0-20).

    Bonuses and penalties accumulate unclamped; the clamp is applied once at
    the end, so a single dealbreaker can outweigh several matched essentials.
    """
    score = BASE_COMPATIBILITY_SCORE

    for essential in viewer.essentials:
        if essential in candidate.tags or essential in candidate.looking_for:
            score += ESSENTIAL_BONUS

    for dealbreaker in viewer.dealbreakers:
        if dealbreaker in candidate.tags:
            score -= DEALBREAKER_PENALTY

    return max(0, min(score, MAX_COMPATIBILITY_SCORE))
