"""
momentum.api.serializers — ORM rows → JSON-ready dicts
=======================================================

Credential hashes never leave this module.
"""

from __future__ import annotations

from datetime import datetime

from momentum.constants import RANK_BADGES
from momentum.database.models import Activity, Challenge, Follow, User
from momentum.engine.leaderboard import RankedUser


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def user_dict(u: User) -> dict:
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "points": u.points,
        "created_at": _iso(u.created_at),
    }


def activity_dict(a: Activity) -> dict:
    return {
        "id": a.id,
        "user_id": a.user_id,
        "type": a.type,
        "duration": a.duration,
        "date": a.date.isoformat(),
        "created_at": _iso(a.created_at),
    }


def challenge_dict(c: Challenge) -> dict:
    return {
        "id": c.id,
        "creator_id": c.creator_id,
        "title": c.title,
        "description": c.description,
        "participants": list(c.participants or []),
        "created_at": _iso(c.created_at),
    }


def follow_dict(f: Follow) -> dict:
    return {
        "id": f.id,
        "follower_id": f.follower_id,
        "following_id": f.following_id,
        "created_at": _iso(f.created_at),
    }


def ranked_dict(r: RankedUser) -> dict:
    return {
        **user_dict(r.user),
        "rank": r.rank,
        "badge": RANK_BADGES[r.rank - 1] if r.rank <= len(RANK_BADGES) else None,
    }
