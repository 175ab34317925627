"""
momentum.services.tracker — Fitness Tracker Service
====================================================

The single entry point the API (or any other caller) uses.  A
:class:`FitnessTracker` owns the engine and a process-wide lock; each
operation runs inside one *unit of work*:

  1. Acquire the tracker lock
  2. Open a session and bind the directory, ledger, board and graph to it
  3. Run the operation
  4. Commit on success, roll back on any exception

The lock makes every check-then-act sequence (duplicate email, duplicate
follow, already joined) atomic even when FastAPI runs endpoints on its
thread pool.  Rolling back on exceptions means a failed operation never
leaves a partial write behind.

Usage::

    tracker = FitnessTracker(engine)
    tracker.start()

    alice = tracker.register("Alice", "a@x.com", "correct-horse")
    tracker.record_activity(alice.id, "run", 30, "2026-01-15")

    with tracker.unit() as unit:            # several steps, one transaction
        unit.challenges.join(challenge_id, alice.id)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date

from sqlalchemy import Engine
from sqlalchemy.orm import Session

from momentum.constants import (
    DEFAULT_LEADERBOARD_LIMIT,
    DEFAULT_LEADERBOARD_PAGE,
    DEFAULT_LEADERBOARD_SIZE,
    DEFAULT_MIN_PASSWORD_LENGTH,
)
from momentum.database.engine import init_db
from momentum.database.models import Activity, Challenge, Follow, User
from momentum.engine.leaderboard import RankedUser, rank_users
from momentum.services.activities import ActivityLedger
from momentum.services.challenges import ChallengeBoard
from momentum.services.follows import FollowGraph
from momentum.services.users import UserDirectory

logger = logging.getLogger(__name__)


@dataclass
class TrackerUnit:
    """Services bound to one session for the length of a unit of work."""

    session: Session
    users: UserDirectory
    activities: ActivityLedger
    challenges: ChallengeBoard
    follows: FollowGraph

    def leaderboard(
        self,
        size: int = DEFAULT_LEADERBOARD_SIZE,
        page: int = DEFAULT_LEADERBOARD_PAGE,
        limit: int = DEFAULT_LEADERBOARD_LIMIT,
    ) -> list[RankedUser]:
        return rank_users(self.users.list(), size=size, page=page, limit=limit)


class FitnessTracker:
    """Owns the stores' lifecycle and serialises every operation."""

    def __init__(
        self,
        engine: Engine,
        *,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ) -> None:
        self.engine = engine
        self.min_password_length = min_password_length
        self._lock = threading.RLock()

    # -- lifecycle ----------------------------------------------------------
    def start(self) -> None:
        init_db(self.engine)
        logger.info("Fitness tracker started")

    def shutdown(self) -> None:
        self.engine.dispose()
        logger.info("Fitness tracker stopped")

    # -- unit of work -------------------------------------------------------
    @contextmanager
    def unit(self) -> Iterator[TrackerUnit]:
        """Yield a :class:`TrackerUnit`; commit on exit, roll back on error.

        Results read inside the unit stay usable after it closes, but lazy
        sequences must be consumed before the block ends.
        """
        with self._lock, Session(self.engine, expire_on_commit=False) as session:
            users = UserDirectory(session, min_password_length=self.min_password_length)
            unit = TrackerUnit(
                session=session,
                users=users,
                activities=ActivityLedger(session, users),
                challenges=ChallengeBoard(session, users),
                follows=FollowGraph(session, users),
            )
            try:
                yield unit
                session.commit()
            except Exception:
                session.rollback()
                raise

    # -- users --------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> User:
        with self.unit() as unit:
            return unit.users.register(name, email, password)

    def update_user(
        self, user_id: str, name: str | None = None, email: str | None = None
    ) -> User:
        with self.unit() as unit:
            return unit.users.update(user_id, name=name, email=email)

    def remove_user(self, user_id: str) -> None:
        with self.unit() as unit:
            unit.users.remove(user_id)

    def accrue_points(self, user_id: str, amount: int) -> User:
        with self.unit() as unit:
            return unit.users.accrue_points(user_id, amount)

    def get_user(self, user_id: str) -> User:
        with self.unit() as unit:
            return unit.users.get(user_id)

    def list_users(self) -> list[User]:
        with self.unit() as unit:
            return list(unit.users.list())

    def find_user_by_email(self, email: str) -> User | None:
        with self.unit() as unit:
            return unit.users.find_by_email(email)

    def authenticate(self, email: str, password: str) -> User:
        with self.unit() as unit:
            return unit.users.authenticate(email, password)

    # -- activities ---------------------------------------------------------
    def record_activity(
        self, user_id: str, activity_type: str, duration: float, on_date: date | str
    ) -> Activity:
        with self.unit() as unit:
            return unit.activities.record(user_id, activity_type, duration, on_date)

    def remove_activity(self, activity_id: str) -> None:
        with self.unit() as unit:
            unit.activities.remove(activity_id)

    def get_activity(self, activity_id: str) -> Activity:
        with self.unit() as unit:
            return unit.activities.get(activity_id)

    def list_activities(
        self,
        user_id: str | None = None,
        activity_type: str | None = None,
        date_from: date | str | None = None,
        date_to: date | str | None = None,
    ) -> list[Activity]:
        with self.unit() as unit:
            return list(unit.activities.list(
                user_id=user_id,
                activity_type=activity_type,
                date_from=date_from,
                date_to=date_to,
            ))

    # -- challenges ---------------------------------------------------------
    def create_challenge(self, creator_id: str, title: str, description: str) -> Challenge:
        with self.unit() as unit:
            return unit.challenges.create(creator_id, title, description)

    def remove_challenge(self, challenge_id: str) -> None:
        with self.unit() as unit:
            unit.challenges.remove(challenge_id)

    def join_challenge(self, challenge_id: str, user_id: str) -> Challenge:
        with self.unit() as unit:
            return unit.challenges.join(challenge_id, user_id)

    def get_challenge(self, challenge_id: str) -> Challenge:
        with self.unit() as unit:
            return unit.challenges.get(challenge_id)

    def list_challenges(
        self, creator_id: str | None = None, title_contains: str | None = None
    ) -> list[Challenge]:
        with self.unit() as unit:
            return list(unit.challenges.list(
                creator_id=creator_id, title_contains=title_contains
            ))

    # -- follows ------------------------------------------------------------
    def follow(self, follower_id: str, following_id: str) -> Follow:
        with self.unit() as unit:
            return unit.follows.follow(follower_id, following_id)

    def unfollow(self, follow_id: str) -> None:
        with self.unit() as unit:
            unit.follows.unfollow(follow_id)

    def get_follow(self, follow_id: str) -> Follow:
        with self.unit() as unit:
            return unit.follows.get(follow_id)

    def followers_of(self, user_id: str) -> list[Follow]:
        with self.unit() as unit:
            return list(unit.follows.followers_of(user_id))

    def following_of(self, user_id: str) -> list[Follow]:
        with self.unit() as unit:
            return list(unit.follows.following_of(user_id))

    # -- leaderboard --------------------------------------------------------
    def leaderboard(
        self,
        size: int = DEFAULT_LEADERBOARD_SIZE,
        page: int = DEFAULT_LEADERBOARD_PAGE,
        limit: int = DEFAULT_LEADERBOARD_LIMIT,
    ) -> list[RankedUser]:
        with self.unit() as unit:
            return unit.leaderboard(size=size, page=page, limit=limit)
