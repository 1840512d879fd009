"""Recommendation API endpoints — ranked feed, interaction recording, preference learning."""

from fastapi import APIRouter, Depends, Query

from beacon.dependencies.auth import require_user_email
from beacon.dependencies.services import get_learner, get_ranker, get_recorder
from beacon.schemas.interaction import InteractionCreate, InteractionRecorded
from beacon.schemas.preferences import LearnResponse, PreferenceSummary
from beacon.schemas.recommendation import RecommendationPage, RecommendationParams
from beacon.services.interaction_service import InteractionRecorder
from beacon.services.preference_learning_service import PreferenceLearner
from beacon.services.recommendation_service import CandidateRanker

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.get("", response_model=RecommendationPage)
async def get_recommendations(
    email: str = Depends(require_user_email),
    ranker: CandidateRanker = Depends(get_ranker),
    lat: float | None = Query(None, description="Override viewer latitude"),
    lng: float | None = Query(None, description="Override viewer longitude"),
    limit: int = Query(20, ge=1, description="Page size (capped at 50)"),
    offset: int = Query(0, ge=0),
    min_score: float = Query(0, ge=0, description="Drop candidates scoring below this"),
    exclude_blocked: bool = Query(True, description="Hide profiles the viewer has blocked"),
):
    """Ranked, paginated candidate profiles for the logged-in user."""
    params = RecommendationParams(
        lat=lat,
        lng=lng,
        limit=limit,
        offset=offset,
        min_score=min_score,
        exclude_blocked=exclude_blocked,
    )
    return await ranker.get_recommendations(email, params)


@router.post("/interaction", response_model=InteractionRecorded)
async def record_interaction(
    body: InteractionCreate,
    email: str = Depends(require_user_email),
    recorder: InteractionRecorder = Depends(get_recorder),
):
    """Record a view/like/message/meet/save/skip/block by the logged-in user."""
    interaction = await recorder.record(email, body.target_email, body.interaction_type, body.metadata)
    return InteractionRecorded(interaction=interaction)


@router.post("/learn", response_model=LearnResponse)
async def learn_preferences(
    email: str = Depends(require_user_email),
    learner: PreferenceLearner = Depends(get_learner),
):
    """Recompute the logged-in user's preference model from their history."""
    model = await learner.learn(email)
    if model is None:
        return LearnResponse(message="Not enough interactions to learn preferences")
    return LearnResponse(message="Preferences updated", preferences=PreferenceSummary.from_model(model))
