"""Recommendation service — multi-factor candidate ranking with an optional learned-preference term."""

import logging
import math
from datetime import datetime, timezone

from beacon.exceptions import ProfileNotFound
from beacon.repositories.base import PreferenceStore, ProfileStore
from beacon.schemas.preferences import LearnedPreferences
from beacon.schemas.recommendation import (
    RecommendationPage,
    RecommendationParams,
    RecommendedProfile,
    ScoreBreakdown,
)
from beacon.services.attribute_scoring import (
    activity_score,
    compatibility_score,
    completeness_score,
    interest_score,
    round_half_up,
)
from beacon.services.geo_scoring import distance_km, distance_score
from beacon.services.ml_scoring import ml_score
from beacon.services.profile_adapter import DEFAULT_PROFILE_TYPE, CandidateProfile

logger = logging.getLogger(__name__)


def score_candidate(
    viewer: CandidateProfile,
    candidate: CandidateProfile,
    viewer_lat: float | None,
    viewer_lng: float | None,
    model: LearnedPreferences | None = None,
    now: datetime | None = None,
) -> ScoreBreakdown:
    """Score one candidate for one viewer.

    overall = distance + interest + activity + completeness + compatibility,
    plus the learned-preference bonus when a model is supplied.
    """
    km = distance_km(viewer_lat, viewer_lng, candidate.last_lat, candidate.last_lng)

    scores = {
        "distance": distance_score(km),
        "interest": interest_score(viewer.tags, candidate.tags),
        "activity": activity_score(candidate.last_seen, now),
        "completeness": completeness_score(candidate),
        "compatibility": compatibility_score(viewer, candidate),
    }
    overall = sum(scores.values())

    ml = None
    if model is not None:
        ml = ml_score(candidate, model)
        overall += ml

    return ScoreBreakdown(**scores, ml=ml, overall=overall, distance_km=km)


def _viewer_location(
    viewer: CandidateProfile, params: RecommendationParams
) -> tuple[float | None, float | None]:
    """Request location override if both coordinates are usable, else the stored location."""
    if (
        params.lat is not None
        and params.lng is not None
        and math.isfinite(params.lat)
        and math.isfinite(params.lng)
    ):
        return params.lat, params.lng
    return viewer.last_lat, viewer.last_lng


def _to_recommended(candidate: CandidateProfile, scores: ScoreBreakdown) -> RecommendedProfile:
    return RecommendedProfile(
        email=candidate.email,
        full_name=candidate.full_name,
        avatar_url=candidate.avatar_url,
        photos=list(candidate.photos),
        bio=candidate.bio or None,
        city=candidate.city,
        profile_type=candidate.profile_type or DEFAULT_PROFILE_TYPE,
        tags=sorted(candidate.tags),
        looking_for=sorted(candidate.looking_for),
        last_seen=candidate.last_seen,
        verified=candidate.is_verified,
        scores=scores,
        # Not rescaled: overall can exceed 100
        match_percentage=round_half_up(scores.overall),
    )


class CandidateRanker:
    """Ranks visible profiles for a viewer.

    Every call performs one bulk candidate read and scores the full set in
    memory before paginating, so the cost is linear in the candidate pool.
    """

    def __init__(self, profile_store: ProfileStore, preference_store: PreferenceStore):
        self.profile_store = profile_store
        self.preference_store = preference_store

    async def get_recommendations(
        self,
        viewer_email: str,
        params: RecommendationParams | None = None,
        now: datetime | None = None,
    ) -> RecommendationPage:
        params = params or RecommendationParams()
        now = now or datetime.now(timezone.utc)

        viewer = await self.profile_store.get_profile(viewer_email)
        if viewer is None:
            raise ProfileNotFound()

        blocked: set[str] = set()
        if params.exclude_blocked:
            blocked = await self.profile_store.get_blocked_emails(viewer_email)

        candidates = await self.profile_store.list_visible_profiles(exclude_email=viewer_email)
        model = await self.preference_store.get_preferences(viewer_email)

        viewer_lat, viewer_lng = _viewer_location(viewer, params)

        scored = []
        for candidate in candidates:
            if candidate.email in blocked:
                continue
            scores = score_candidate(viewer, candidate, viewer_lat, viewer_lng, model, now)
            if scores.overall < params.min_score:
                continue
            scored.append((candidate, scores))

        # Stable: ties keep the store's fetch order
        scored.sort(key=lambda item: item[1].overall, reverse=True)

        limit = params.page_size
        page = scored[params.offset:params.offset + limit]
        total = len(scored)

        logger.debug(
            "Ranked %d of %d candidates for %s (ml=%s)",
            total, len(candidates), viewer_email, model is not None,
        )

        return RecommendationPage(
            recommendations=[_to_recommended(c, s) for c, s in page],
            total=total,
            offset=params.offset,
            limit=limit,
            has_more=params.offset + limit < total,
            ml_enabled=model is not None,
            preference_count=len(model.preferred_interests) if model else 0,
        )
