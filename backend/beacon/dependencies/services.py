"""Service factories — wire request-scoped stores into the ranking and learning services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from beacon.models.base import get_db
from beacon.repositories.sql import SqlInteractionStore, SqlPreferenceStore, SqlProfileStore
from beacon.services.interaction_service import InteractionRecorder
from beacon.services.preference_learning_service import PreferenceLearner
from beacon.services.recommendation_service import CandidateRanker


def get_ranker(db: AsyncSession = Depends(get_db)) -> CandidateRanker:
    return CandidateRanker(SqlProfileStore(db), SqlPreferenceStore(db))


def get_recorder(db: AsyncSession = Depends(get_db)) -> InteractionRecorder:
    return InteractionRecorder(SqlInteractionStore(db))


def get_learner(db: AsyncSession = Depends(get_db)) -> PreferenceLearner:
    return PreferenceLearner(SqlInteractionStore(db), SqlProfileStore(db), SqlPreferenceStore(db))
