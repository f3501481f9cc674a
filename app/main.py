"""FastAPI application entrypoint: lifespan, middleware and router registration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis
from sqlalchemy import text

from app.config import get_settings
from app.database import engine
from app.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from app.middleware.rate_limit import RateLimitMiddleware
from app.routes import chat, compatibility, datasets, market, predictions, profiles, weather

logger = logging.getLogger("farmchat")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Verify the database connection
      3. Connect to Redis (weather cache and rate-limit counters)

    Shutdown:
      1. Close Redis connection pool
      2. Dispose SQLAlchemy engine
    """
    configure_structured_logging()
    settings = get_settings()
    logger.info(
        "FarmChat starting",
        extra={
            "log_level": settings.log_level,
            "llm_configured": bool(settings.mistral_api_key),
            "weather_configured": bool(settings.openweather_api_key),
        },
    )

    redis: Redis | None = None
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

        redis = Redis.from_url(settings.redis_url, decode_responses=True)
        await redis.ping()
        app.state.redis = redis
    except Exception as exc:
        logger.exception("startup failure", extra={"error": str(exc)})
        raise

    yield

    logger.info("FarmChat shutting down")
    if redis is not None:
        await redis.aclose()
    await engine.dispose()


app = FastAPI(
    title="FarmChat API",
    description=(
        "Farmer chat assistant API: onboarding profiles, crop compatibility "
        "checks, CSV dataset uploads with yield and price predictions, weather "
        "lookups and LLM-backed farming advice."
    ),
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── Middleware (last added runs first) ──────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Liveness check for the API process."""
    return {
        "status": "ok",
        "service": "farmchat",
        "version": VERSION,
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(profiles.router, prefix="/api/v1")
app.include_router(compatibility.router, prefix="/api/v1")
app.include_router(datasets.router, prefix="/api/v1")
app.include_router(predictions.router, prefix="/api/v1")
app.include_router(chat.router, prefix="/api/v1")
app.include_router(weather.router, prefix="/api/v1")
app.include_router(market.router, prefix="/api/v1")
