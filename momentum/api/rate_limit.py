"""
momentum.api.rate_limit — Login Throttle
=========================================

Sliding-window limit on failed logins, keyed by the email being tried:
``login_max_attempts`` failures per ``login_window_seconds``.  Once the
window is full ``POST /auth/login`` answers HTTP 429 with a ``Retry-After``
header.  A successful login clears the email's failures.

State lives in the ``login_attempts`` table so it survives restarts and is
shared by every worker on the same database.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from fastapi import Depends, HTTPException, status
from sqlalchemy import Engine, delete, select

from momentum.api.deps import get_config, get_engine
from momentum.config import MomentumConfig
from momentum.database.engine import get_session
from momentum.database.models import LoginAttempt

logger = logging.getLogger(__name__)


class LoginThrottle:
    """DB-backed sliding-window counter of failed logins per email."""

    def __init__(
        self,
        engine: Engine,
        *,
        max_attempts: int,
        window_seconds: int,
    ) -> None:
        self.engine = engine
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds

    @staticmethod
    def _aware(value: datetime) -> datetime:
        # SQLite hands back naive datetimes.
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value

    def check(self, email: str) -> tuple[bool, dict[str, Any]]:
        """Return ``(allowed, info)``; *info* has ``remaining``, ``reset`` and ``limit``."""
        now = datetime.now(UTC)
        cutoff = now - timedelta(seconds=self.window_seconds)

        with get_session(self.engine) as session:
            session.execute(
                delete(LoginAttempt).where(
                    LoginAttempt.email == email,
                    LoginAttempt.timestamp < cutoff,
                )
            )
            timestamps = session.scalars(
                select(LoginAttempt.timestamp)
                .where(LoginAttempt.email == email)
                .order_by(LoginAttempt.timestamp.asc())
            ).all()

        count = len(timestamps)
        if count >= self.max_attempts:
            oldest = self._aware(timestamps[0])
            reset = (oldest + timedelta(seconds=self.window_seconds) - now).total_seconds()
            return False, {
                "remaining": 0,
                "reset": max(1, int(reset) + 1),
                "limit": self.max_attempts,
            }
        return True, {
            "remaining": self.max_attempts - count,
            "reset": self.window_seconds,
            "limit": self.max_attempts,
        }

    def record_failure(self, email: str) -> None:
        with get_session(self.engine) as session:
            session.add(LoginAttempt(email=email))

    def reset(self, email: str | None = None) -> None:
        """Forget failures for *email*, or for everyone when ``None``."""
        with get_session(self.engine) as session:
            stmt = delete(LoginAttempt)
            if email is not None:
                stmt = stmt.where(LoginAttempt.email == email)
            session.execute(stmt)

    def enforce(self, email: str) -> None:
        """Raise HTTP 429 if *email* has used up its window."""
        allowed, info = self.check(email)
        if allowed:
            return
        logger.warning(
            "Login throttled for %s: %d failures within %ds",
            email, self.max_attempts, self.window_seconds,
        )
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "rate_limit_exceeded",
                "message": (
                    f"Too many failed logins: {self.max_attempts}"
                    f" per {self.window_seconds} seconds."
                ),
                "retry_after": info["reset"],
            },
            headers={"Retry-After": str(info["reset"])},
        )


def get_login_throttle(
    engine: Engine = Depends(get_engine),
    cfg: MomentumConfig = Depends(get_config),
) -> LoginThrottle:
    return LoginThrottle(
        engine,
        max_attempts=cfg.login_max_attempts,
        window_seconds=cfg.login_window_seconds,
    )
