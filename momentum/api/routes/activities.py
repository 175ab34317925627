"""
momentum.api.routes.activities — Workout log
==============================================
"""

from __future__ import annotations

from fastapi import APIRouter, Query
from pydantic import BaseModel, StrictFloat, StrictInt

from momentum.api.deps import CallerId, Tracker, require_self
from momentum.api.serializers import activity_dict

router = APIRouter(prefix="/activities", tags=["activities"])


class ActivityCreate(BaseModel):
    type: str
    duration: StrictInt | StrictFloat
    date: str


@router.post("", status_code=201)
def record_activity(body: ActivityCreate, caller: CallerId, tracker: Tracker):
    """Log a workout for the caller; credits one point per whole minute."""
    activity = tracker.record_activity(caller, body.type, body.duration, body.date)
    return {"message": "Activity created successfully", "activity": activity_dict(activity)}


@router.get("")
def list_activities(
    tracker: Tracker,
    user_id: str | None = Query(None),
    type: str | None = Query(None),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
):
    activities = tracker.list_activities(
        user_id=user_id,
        activity_type=type,
        date_from=date_from,
        date_to=date_to,
    )
    return {"activities": [activity_dict(a) for a in activities]}


@router.get("/{activity_id}")
def get_activity(activity_id: str, tracker: Tracker):
    return {"activity": activity_dict(tracker.get_activity(activity_id))}


@router.delete("/{activity_id}", status_code=204)
def remove_activity(activity_id: str, caller: CallerId, tracker: Tracker):
    """Delete one of the caller's activities.  Earned points are kept."""
    with tracker.unit() as unit:
        activity = unit.activities.get(activity_id)
        require_self(caller, activity.user_id)
        unit.activities.remove(activity_id)
