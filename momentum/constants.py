"""
momentum.constants — Shared Constants & Helpers
================================================

Single source of truth for the points rate, validation patterns and the
leaderboard defaults.  Import from here instead of duplicating in services
and routes.
"""

from __future__ import annotations

import math
import re

# ---------------------------------------------------------------------------
# Point accrual — 1 point per whole minute of activity
# ---------------------------------------------------------------------------
POINTS_PER_MINUTE = 1

# An activity belongs to a single calendar day.
MAX_DURATION_MINUTES = 24 * 60


def points_for_duration(duration: float) -> int:
    """Points credited for an activity lasting *duration* minutes.

    Partial minutes are dropped, so a 30.9 minute run earns 30 points and a
    sub-minute entry earns nothing.
    """
    return math.floor(duration * POINTS_PER_MINUTE)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEFAULT_MIN_PASSWORD_LENGTH = 8

# Column widths in database/models.py
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
ACTIVITY_TYPE_MAX_LENGTH = 100
TITLE_MAX_LENGTH = 200

# ---------------------------------------------------------------------------
# Leaderboard window defaults (size, page, limit)
# ---------------------------------------------------------------------------
DEFAULT_LEADERBOARD_SIZE = 10
DEFAULT_LEADERBOARD_PAGE = 1
DEFAULT_LEADERBOARD_LIMIT = 10

RANK_BADGES: list[str] = ["\U0001f947", "\U0001f948", "\U0001f949"]  # 🥇🥈🥉
