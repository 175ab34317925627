"""
momentum.api.routes.logs — Recent service logs
================================================
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from momentum.api.deps import CallerId
from momentum.services.log_buffer import get_buffer

router = APIRouter(tags=["logs"])


@router.get("/logs")
def get_logs(
    caller: CallerId,
    tail: int = Query(100, ge=1, le=1000),
    level: str | None = Query(None),
    logger_prefix: str | None = Query(None, alias="logger"),
):
    try:
        entries = get_buffer().tail(tail, min_level=level, logger_prefix=logger_prefix)
    except ValueError as exc:
        raise HTTPException(400, str(exc))
    return {"logs": entries}
