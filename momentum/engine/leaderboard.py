"""
momentum.engine.leaderboard — Ranking & Pagination Window
==========================================================

Pure ranking pipeline.  No DB I/O inside the engine.

Pipeline stages:
  users → sort by points desc (stable on registration order) → top ``size``
        → window ``[(page - 1) * limit, page * limit)`` over that top-N

Pagination happens *after* truncation, so page 2 of a size-10 board with
``limit=10`` is always empty.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from itertools import islice
from typing import TYPE_CHECKING

from momentum.constants import (
    DEFAULT_LEADERBOARD_LIMIT,
    DEFAULT_LEADERBOARD_PAGE,
    DEFAULT_LEADERBOARD_SIZE,
)
from momentum.engine.validation import validate_positive_int

if TYPE_CHECKING:
    from momentum.database.models import User


@dataclass(frozen=True, slots=True)
class RankedUser:
    """One leaderboard row; ``rank`` is 1-based within the top-N."""

    rank: int
    user: User


def rank_users(
    users: Iterable[User],
    size: int = DEFAULT_LEADERBOARD_SIZE,
    page: int = DEFAULT_LEADERBOARD_PAGE,
    limit: int = DEFAULT_LEADERBOARD_LIMIT,
) -> list[RankedUser]:
    """Return the requested leaderboard window.

    Ties on points keep registration order (``User.seq``).  ``sorted`` is
    stable, so equal ``seq`` values (never produced by the directory) would
    fall back to input order.

    Raises
    ------
    InvalidInput
        If *size*, *page* or *limit* is not a positive integer.
    """
    size = validate_positive_int(size, "size")
    page = validate_positive_int(page, "page")
    limit = validate_positive_int(limit, "limit")

    ordered = sorted(users, key=lambda u: (-u.points, u.seq))
    top = ordered[:size]

    offset = (page - 1) * limit
    window = islice(enumerate(top, start=1), offset, offset + limit)
    return [RankedUser(rank=rank, user=user) for rank, user in window]
