"""
momentum.api.routes.leaderboard — Ranked points table
=======================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Query

from momentum.api.deps import Config, Tracker
from momentum.api.serializers import ranked_dict

router = APIRouter(tags=["leaderboard"])


@router.get("/leaderboard")
def get_leaderboard(
    tracker: Tracker,
    cfg: Config,
    size: int | None = Query(None, ge=1),
    page: int | None = Query(None, ge=1),
    limit: int | None = Query(None, ge=1),
):
    """Top ``size`` users by points, windowed by ``page``/``limit``."""
    size = size or cfg.leaderboard_size
    page = page or cfg.leaderboard_page
    limit = limit or cfg.leaderboard_limit
    ranked = tracker.leaderboard(size=size, page=page, limit=limit)
    return {
        "size": size,
        "page": page,
        "limit": limit,
        "leaderboard": [ranked_dict(r) for r in ranked],
    }
