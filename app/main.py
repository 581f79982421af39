import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis
from fastapi import FastAPI
from sqlalchemy import text

from app.config import settings
from app.database import async_session, engine
from app.middleware.request_logging import RequestLoggingMiddleware

# Configure structured logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s %(message)s",
)

logger = logging.getLogger("termsuggest")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: initialize Redis connection pool (used for rate limiting)
    app.state.redis = aioredis.from_url(
        settings.redis_url,
        decode_responses=True,
    )
    yield
    # Shutdown: close Redis and the database pool
    await app.state.redis.aclose()
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Incremental term suggestions ranked by match quality and popularity.",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# --- Routers ---
from app.api.v1 import suggest  # noqa: E402

app.include_router(suggest.router, prefix="/api/v1", tags=["Suggestions"])


@app.get("/api/v1/health", tags=["Health"])
async def health_check():
    redis_ok = False
    try:
        redis_ok = await app.state.redis.ping()
    except Exception as e:
        logger.warning("Redis health check failed: %s", e)

    db_ok = False
    try:
        async with async_session() as db:
            await db.execute(text("SELECT 1"))
        db_ok = True
    except Exception as e:
        logger.warning("Database health check failed: %s", e)

    return {
        "status": "healthy" if redis_ok and db_ok else "degraded",
        "version": settings.app_version,
        "services": {
            "redis": "up" if redis_ok else "down",
            "database": "up" if db_ok else "down",
        },
    }
