"""
momentum.database.models — SQLAlchemy 2.0 Data Models
======================================================

Tables:
- users           — Member profiles, hashed credentials and point balances
- activities      — Logged workouts (immutable once recorded)
- challenges      — Member-created challenges with an ordered participant list
- follows         — Directed follow edges between members
- login_attempts  — Failed login timestamps for the login throttle

Reference columns (``user_id``, ``creator_id``, ``follower_id``,
``following_id``) carry no foreign keys: removing a user leaves those rows
in place with the dangling id.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from datetime import date as CalendarDate

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from momentum.constants import (
    ACTIVITY_TYPE_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)


def new_id() -> str:
    """Fresh opaque entity identifier."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Momentum ORM models."""


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    seq: Mapped[int] = mapped_column(Integer, nullable=False)  # registration order
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_points_desc", "points"),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name!r} points={self.points}>"


# ---------------------------------------------------------------------------
# Activities — one row per logged workout
# ---------------------------------------------------------------------------
class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    type: Mapped[str] = mapped_column(String(ACTIVITY_TYPE_MAX_LENGTH), nullable=False)
    duration: Mapped[float] = mapped_column(Float, nullable=False)  # minutes
    date: Mapped[CalendarDate] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_activities_user_date", "user_id", "date"),
    )

    def __repr__(self) -> str:
        return f"<Activity id={self.id} user={self.user_id} type={self.type!r} min={self.duration}>"


# ---------------------------------------------------------------------------
# Challenges
# ---------------------------------------------------------------------------
class Challenge(Base):
    """A member-created challenge.

    ``participants`` is an ordered list of user ids; the creator is not a
    participant until they join.  The list is replaced, never mutated in
    place, so SQLAlchemy picks up the change.
    """
    __tablename__ = "challenges"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    creator_id: Mapped[str] = mapped_column(String(36), nullable=False)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    participants: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_challenges_creator", "creator_id"),
    )

    def __repr__(self) -> str:
        return f"<Challenge id={self.id} title={self.title!r} n={len(self.participants or [])}>"


# ---------------------------------------------------------------------------
# Follows — directed edges follower → following
# ---------------------------------------------------------------------------
class Follow(Base):
    __tablename__ = "follows"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    follower_id: Mapped[str] = mapped_column(String(36), nullable=False)
    following_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        Index("ix_follows_following", "following_id"),
    )

    def __repr__(self) -> str:
        return f"<Follow {self.follower_id} -> {self.following_id}>"


# ---------------------------------------------------------------------------
# LoginAttempt — sliding-window state for the login throttle
# ---------------------------------------------------------------------------
class LoginAttempt(Base):
    __tablename__ = "login_attempts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        Index("ix_login_attempts_email_ts", "email", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<LoginAttempt email={self.email!r} ts={self.timestamp}>"
