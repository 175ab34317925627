"""
momentum.api.main — FastAPI application entry point
=====================================================

Run with::

    uvicorn momentum.api.main:app --reload --port 8000
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from momentum import __version__  # noqa: E402
from momentum.api.auth import router as auth_router  # noqa: E402
from momentum.api.deps import get_tracker  # noqa: E402
from momentum.api.errors import register_error_handlers  # noqa: E402
from momentum.api.routes.activities import router as activities_router  # noqa: E402
from momentum.api.routes.challenges import router as challenges_router  # noqa: E402
from momentum.api.routes.follows import router as follows_router  # noqa: E402
from momentum.api.routes.leaderboard import router as leaderboard_router  # noqa: E402
from momentum.api.routes.logs import router as logs_router  # noqa: E402
from momentum.api.routes.users import router as users_router  # noqa: E402
from momentum.services.log_buffer import install_handler  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Resolve allowed CORS origins from env with safe defaults.

    Priority:
      1) CORS_ALLOW_ORIGINS (comma-separated)
      2) FRONTEND_URL (single origin)
    """
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    if raw:
        return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]

    frontend_url = os.getenv("FRONTEND_URL", "").strip()
    if frontend_url:
        return [frontend_url.rstrip("/")]

    return []


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle; the tracker owns the engine."""
    # After startup: Uvicorn reconfigures logging when it boots.
    install_handler()

    tracker = get_tracker()
    tracker.start()
    logger.info("Momentum API started, engine ready (%s)", tracker.engine.url.database)
    yield
    tracker.shutdown()
    logger.info("Momentum API shutting down")


app = FastAPI(
    title="Momentum API",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router, prefix="/api")
app.include_router(users_router, prefix="/api")
app.include_router(activities_router, prefix="/api")
app.include_router(challenges_router, prefix="/api")
app.include_router(follows_router, prefix="/api")
app.include_router(leaderboard_router, prefix="/api")
app.include_router(logs_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
