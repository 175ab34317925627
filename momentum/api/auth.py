"""
momentum.api.auth — Email/password login → JWT
=================================================
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from momentum.api.deps import CallerId, Config, Tracker, create_access_token
from momentum.api.rate_limit import LoginThrottle, get_login_throttle
from momentum.api.serializers import user_dict
from momentum.constants import EMAIL_MAX_LENGTH
from momentum.database.engine import run_db
from momentum.errors import InvalidCredentials

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str = Field(max_length=EMAIL_MAX_LENGTH)
    password: str


@router.post("/login")
async def login(
    body: LoginRequest,
    tracker: Tracker,
    cfg: Config,
    throttle: LoginThrottle = Depends(get_login_throttle),
):
    """Exchange email + password for a bearer token."""
    await run_db(throttle.enforce, body.email)
    try:
        user = await run_db(tracker.authenticate, body.email, body.password)
    except InvalidCredentials:
        await run_db(throttle.record_failure, body.email)
        logger.warning("Failed login for %s", body.email)
        raise
    await run_db(throttle.reset, body.email)

    token = create_access_token(user.id, cfg.token_ttl_hours)
    logger.info("User %s logged in", user.id)
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": user_dict(user),
    }


@router.get("/me")
async def me(caller: CallerId, tracker: Tracker):
    """Return the authenticated caller's profile."""
    user = await run_db(tracker.get_user, caller)
    return {"user": user_dict(user)}
