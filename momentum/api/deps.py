"""
momentum.api.deps — FastAPI dependency injection
==================================================
"""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Annotated

import jwt
from fastapi import Depends, Header, HTTPException, status
from jwt.exceptions import InvalidTokenError
from sqlalchemy import Engine

from momentum.config import MomentumConfig, load_config
from momentum.database.engine import create_db_engine
from momentum.services.tracker import FitnessTracker

_WEAK_SECRETS = frozenset({
    "momentum-dev-secret-change-me",
    "change-me",
    "secret",
    "dev",
    "",
})

_MIN_SECRET_LENGTH = 32

JWT_ALGORITHM = "HS256"


def _load_jwt_secret() -> str:
    """Load and validate JWT_SECRET from the environment.

    Raises RuntimeError at import time if the secret is missing, blank,
    too short (< 32 chars), or a known weak default.
    """
    secret = os.getenv("JWT_SECRET", "")
    if not secret:
        raise RuntimeError(
            "JWT_SECRET environment variable is not set. "
            "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(64))\""
        )
    if secret in _WEAK_SECRETS:
        raise RuntimeError(
            f"JWT_SECRET is set to a known weak default ('{secret}'). "
            "Please set a strong, unique secret."
        )
    if len(secret) < _MIN_SECRET_LENGTH:
        raise RuntimeError(
            f"JWT_SECRET is too short ({len(secret)} chars). "
            f"Minimum length is {_MIN_SECRET_LENGTH} characters."
        )
    return secret


JWT_SECRET: str = _load_jwt_secret()


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def get_config() -> MomentumConfig:
    return load_config()


@lru_cache(maxsize=1)
def get_tracker() -> FitnessTracker:
    """The process-wide tracker, created on first use."""
    cfg = get_config()
    return FitnessTracker(get_engine(), min_password_length=cfg.min_password_length)


def create_access_token(user_id: str, ttl_hours: int) -> str:
    payload = {
        "sub": user_id,
        "exp": datetime.now(UTC) + timedelta(hours=ttl_hours),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Validate the bearer JWT and return the caller's user id. Raises 401."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Missing token")
    token = authorization.split(" ", 1)[1]
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except InvalidTokenError:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid token")
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid token")
    return subject


def require_self(caller_id: str, owner_id: str) -> None:
    """Raise 403 unless the caller owns the resource."""
    if caller_id != owner_id:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Not allowed to modify this resource")


CallerId = Annotated[str, Depends(get_current_user_id)]
Tracker = Annotated[FitnessTracker, Depends(get_tracker)]
Config = Annotated[MomentumConfig, Depends(get_config)]
