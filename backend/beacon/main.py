"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import redis.asyncio as aioredis
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.sessions import SessionMiddleware
from sqlalchemy import text

from beacon.config import get_settings
from beacon.models.base import Base, init_db, dispose_db, get_engine, get_session_factory
from beacon.api.v1 import router as api_v1_router
from beacon.middleware.error_handler import register_error_handlers

# Register all tables with Base.metadata
from beacon.models.user_profile import UserProfile  # noqa: F401
from beacon.models.user_block import UserBlock  # noqa: F401
from beacon.models.user_interaction import UserInteraction  # noqa: F401
from beacon.models.learned_preference import LearnedPreference  # noqa: F401

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("Starting %s...", settings.app_name)
    init_db(settings.database_url, echo=settings.debug)
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables verified")
    yield
    logger.info("Shutting down...")
    await dispose_db()


app = FastAPI(
    title=settings.app_name,
    description="Candidate ranking and preference learning for the discovery feed",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(GZipMiddleware, minimum_size=500)
app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routers
app.include_router(api_v1_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "app": settings.app_name}


async def _check_database() -> dict:
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        return {"ok": False, "message": str(e)}


async def _check_task_broker() -> dict:
    """Background learning is queued through Redis; the feed itself does not need it."""
    client = aioredis.from_url(settings.redis_url, socket_timeout=5)
    try:
        await client.ping()
        return {"ok": True}
    except Exception as e:
        logger.warning("Task broker health check failed: %s", e)
        return {"ok": False, "message": str(e)}
    finally:
        await client.aclose()


@app.get("/health/detailed")
async def detailed_health_check():
    checks = {
        "database": await _check_database(),
        "task_broker": await _check_task_broker(),
    }
    # Ranking and recording only need the database
    if not checks["database"]["ok"]:
        status = "unhealthy"
    elif not checks["task_broker"]["ok"]:
        status = "degraded"
    else:
        status = "healthy"

    return {
        "status": status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks,
    }
