"""Celery tasks for learned preference updates."""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone, timedelta
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from beacon.config import get_settings
from beacon.exceptions import StorageFailure
from beacon.repositories.sql import SqlInteractionStore, SqlPreferenceStore, SqlProfileStore
from beacon.services.preference_learning_service import PreferenceLearner
from beacon.tasks.celery_app import celery_app

# Import ALL models to ensure relationships resolve
from beacon.models.user_profile import UserProfile  # noqa: F401
from beacon.models.user_block import UserBlock  # noqa: F401
from beacon.models.user_interaction import UserInteraction  # noqa: F401
from beacon.models.learned_preference import LearnedPreference  # noqa: F401

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def _task_sessions() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Session factory bound to a per-run engine; each task runs its own event loop."""
    engine = create_async_engine(settings.database_url, poolclass=NullPool)
    try:
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


def _learner(session: AsyncSession) -> PreferenceLearner:
    return PreferenceLearner(
        SqlInteractionStore(session),
        SqlProfileStore(session),
        SqlPreferenceStore(session),
    )


async def _learn_one(sessions: async_sessionmaker[AsyncSession], user_email: str) -> bool:
    async with sessions() as session:
        try:
            model = await _learner(session).learn(user_email)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
    return model is not None


async def _learn_user(user_email: str) -> bool:
    async with _task_sessions() as sessions:
        return await _learn_one(sessions, user_email)


async def _learn_active_users(window_hours: int, pause_seconds: float) -> dict:
    since = datetime.now(timezone.utc) - timedelta(hours=window_hours)
    learned = skipped = failed = 0

    async with _task_sessions() as sessions:
        async with sessions() as session:
            user_emails = await SqlInteractionStore(session).list_recently_active_users(since)

        for index, user_email in enumerate(user_emails):
            # Pace runs so a large batch doesn't monopolize the database
            if index and pause_seconds:
                await asyncio.sleep(pause_seconds)
            try:
                if await _learn_one(sessions, user_email):
                    learned += 1
                else:
                    skipped += 1
            except (StorageFailure, SQLAlchemyError):
                failed += 1
                logger.exception("Failed to learn preferences for %s", user_email)

    return {"users": len(user_emails), "learned": learned, "skipped": skipped, "failed": failed}


@celery_app.task(name="beacon.tasks.preference_tasks.learn_user_preferences")
def learn_user_preferences(user_email: str):
    """Recompute one user's preference model."""
    try:
        learned = asyncio.run(_learn_user(user_email))
    except Exception:
        logger.exception("Failed to learn preferences for %s", user_email)
        raise
    logger.info("Preference learning for %s: %s", user_email, "updated" if learned else "no model")
    return {"user_email": user_email, "learned": learned}


@celery_app.task(name="beacon.tasks.preference_tasks.learn_active_users")
def learn_active_users():
    """Relearn preferences for users with recent interactions (runs hourly via beat)."""
    result = asyncio.run(
        _learn_active_users(
            settings.learning_active_window_hours,
            settings.learning_batch_pause_seconds,
        )
    )
    if result["users"]:
        logger.info(
            "Batch learned preferences: %d updated, %d skipped, %d failed of %d users",
            result["learned"], result["skipped"], result["failed"], result["users"],
        )
    return result
