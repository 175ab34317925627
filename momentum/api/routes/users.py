"""
momentum.api.routes.users — Registration & profiles
=====================================================
"""

from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from momentum.api.deps import CallerId, Tracker, require_self
from momentum.api.serializers import user_dict

router = APIRouter(prefix="/users", tags=["users"])


class UserCreate(BaseModel):
    name: str
    email: str
    password: str


class UserUpdate(BaseModel):
    name: str | None = None
    email: str | None = None


@router.post("", status_code=201)
def register_user(body: UserCreate, tracker: Tracker):
    user = tracker.register(body.name, body.email, body.password)
    return {"message": "User created successfully", "user": user_dict(user)}


@router.get("")
def list_users(tracker: Tracker):
    return {"users": [user_dict(u) for u in tracker.list_users()]}


@router.get("/{user_id}")
def get_user(user_id: str, tracker: Tracker):
    return {"user": user_dict(tracker.get_user(user_id))}


@router.put("/{user_id}")
def update_user(user_id: str, body: UserUpdate, caller: CallerId, tracker: Tracker):
    require_self(caller, user_id)
    user = tracker.update_user(user_id, name=body.name, email=body.email)
    return {"message": "User updated successfully", "user": user_dict(user)}


@router.delete("/{user_id}", status_code=204)
def remove_user(user_id: str, caller: CallerId, tracker: Tracker):
    require_self(caller, user_id)
    tracker.remove_user(user_id)
