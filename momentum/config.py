"""
momentum.config — YAML Configuration Loader
============================================

Reads ``config.yaml`` for service-level settings: password policy, token
lifetime, leaderboard window defaults and the login throttle.  Secrets
(``JWT_SECRET``) and the database URL stay in the environment.

Usage::

    from momentum.config import load_config

    cfg = load_config()              # reads $MOMENTUM_CONFIG or ./config.yaml
    print(cfg.service_name)          # "Momentum"
    print(cfg.leaderboard_size)      # 10
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from momentum.constants import (
    DEFAULT_LEADERBOARD_LIMIT,
    DEFAULT_LEADERBOARD_PAGE,
    DEFAULT_LEADERBOARD_SIZE,
    DEFAULT_MIN_PASSWORD_LENGTH,
)

DEFAULT_CONFIG_PATH = "config.yaml"


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class MomentumConfig:
    """Immutable configuration loaded from ``config.yaml``.

    Every key is optional in the file; missing keys take the defaults below.
    All integer settings must be positive.
    """

    # Identity
    service_name: str = "Momentum"

    # Accounts
    min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH
    token_ttl_hours: int = 12

    # Leaderboard window defaults
    leaderboard_size: int = DEFAULT_LEADERBOARD_SIZE
    leaderboard_page: int = DEFAULT_LEADERBOARD_PAGE
    leaderboard_limit: int = DEFAULT_LEADERBOARD_LIMIT

    # Login throttle
    login_max_attempts: int = 5
    login_window_seconds: int = 300

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, int) and value <= 0:
                raise ValueError(f"{f.name} must be a positive integer, got {value}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def load_config(path: str | Path | None = None) -> MomentumConfig:
    """Read *path* and return a :class:`MomentumConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.  Defaults to
        ``$MOMENTUM_CONFIG`` or ``config.yaml`` in the working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    ValueError
        If an integer setting is zero or negative.
    """
    config_path = Path(path or os.getenv("MOMENTUM_CONFIG", DEFAULT_CONFIG_PATH))
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    defaults = MomentumConfig()
    return MomentumConfig(
        service_name=str(raw.get("service_name", defaults.service_name)),
        min_password_length=int(raw.get("min_password_length", defaults.min_password_length)),
        token_ttl_hours=int(raw.get("token_ttl_hours", defaults.token_ttl_hours)),
        leaderboard_size=int(raw.get("leaderboard_size", defaults.leaderboard_size)),
        leaderboard_page=int(raw.get("leaderboard_page", defaults.leaderboard_page)),
        leaderboard_limit=int(raw.get("leaderboard_limit", defaults.leaderboard_limit)),
        login_max_attempts=int(raw.get("login_max_attempts", defaults.login_max_attempts)),
        login_window_seconds=int(
            raw.get("login_window_seconds", defaults.login_window_seconds)
        ),
    )
