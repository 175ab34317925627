"""
momentum.api.routes.follows — Follow graph
============================================
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from momentum.api.deps import CallerId, Tracker, require_self
from momentum.api.serializers import follow_dict

router = APIRouter(prefix="/follows", tags=["follows"])


class FollowCreate(BaseModel):
    following_id: str


@router.post("", status_code=201)
def follow_user(body: FollowCreate, caller: CallerId, tracker: Tracker):
    follow = tracker.follow(caller, body.following_id)
    return {"message": "Followed user successfully", "follow": follow_dict(follow)}


@router.get("/{user_id}")
def list_followers(user_id: str, tracker: Tracker):
    return {"followers": [follow_dict(f) for f in tracker.followers_of(user_id)]}


@router.get("/{user_id}/following")
def list_following(user_id: str, tracker: Tracker):
    return {"following": [follow_dict(f) for f in tracker.following_of(user_id)]}


@router.delete("/{follow_id}", status_code=204)
def unfollow(follow_id: str, caller: CallerId, tracker: Tracker):
    with tracker.unit() as unit:
        follow = unit.follows.get(follow_id)
        require_self(caller, follow.follower_id)
        unit.follows.unfollow(follow_id)
