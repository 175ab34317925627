"""
momentum.api.routes.challenges — Challenges & participation
=============================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Query
from pydantic import BaseModel

from momentum.api.deps import CallerId, Tracker, require_self
from momentum.api.serializers import challenge_dict

router = APIRouter(prefix="/challenges", tags=["challenges"])


class ChallengeCreate(BaseModel):
    title: str
    description: str


@router.post("", status_code=201)
def create_challenge(body: ChallengeCreate, caller: CallerId, tracker: Tracker):
    challenge = tracker.create_challenge(caller, body.title, body.description)
    return {"message": "Challenge created successfully", "challenge": challenge_dict(challenge)}


@router.get("")
def list_challenges(
    tracker: Tracker,
    creator_id: str | None = Query(None),
    title_contains: str | None = Query(None),
):
    challenges = tracker.list_challenges(creator_id=creator_id, title_contains=title_contains)
    return {"challenges": [challenge_dict(c) for c in challenges]}


@router.get("/{challenge_id}")
def get_challenge(challenge_id: str, tracker: Tracker):
    return {"challenge": challenge_dict(tracker.get_challenge(challenge_id))}


@router.post("/{challenge_id}/join")
def join_challenge(challenge_id: str, caller: CallerId, tracker: Tracker):
    challenge = tracker.join_challenge(challenge_id, caller)
    return {"message": "Joined challenge successfully", "challenge": challenge_dict(challenge)}


@router.delete("/{challenge_id}", status_code=204)
def remove_challenge(challenge_id: str, caller: CallerId, tracker: Tracker):
    with tracker.unit() as unit:
        challenge = unit.challenges.get(challenge_id)
        require_self(caller, challenge.creator_id)
        unit.challenges.remove(challenge_id)
