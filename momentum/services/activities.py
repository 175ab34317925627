"""
momentum.services.activities — Activity Ledger
===============================================

Records workouts and credits points to the owning user: one point per whole
minute (:func:`~momentum.constants.points_for_duration`).

``record`` validates everything (user, type, duration, date) before it
writes anything, so the activity insert and the point accrual either both
happen or neither does.  Removing an activity keeps the points it earned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date

from sqlalchemy.orm import Session

from momentum.constants import ACTIVITY_TYPE_MAX_LENGTH, points_for_duration
from momentum.database.models import Activity, new_id
from momentum.database.store import EntityStore
from momentum.engine.validation import parse_date, require_text, validate_duration
from momentum.errors import ActivityNotFound
from momentum.services.users import UserDirectory

logger = logging.getLogger(__name__)


class ActivityLedger:
    """Activity records keyed by id; drives point accrual."""

    def __init__(self, session: Session, users: UserDirectory) -> None:
        self.store: EntityStore[Activity] = EntityStore(session, Activity)
        self.users = users

    def get(self, activity_id: str) -> Activity:
        activity = self.store.get(activity_id)
        if activity is None:
            raise ActivityNotFound()
        return activity

    def record(
        self,
        user_id: str,
        activity_type: str,
        duration: float,
        on_date: date | str,
    ) -> Activity:
        """Persist an activity and credit its points to *user_id*.

        Raises
        ------
        UserNotFound
            *user_id* does not resolve.
        InvalidInput
            Blank type, non-positive duration or an unparseable date.
        """
        # Validate-before-write: nothing below can fail once inserts begin.
        user = self.users.get(user_id)
        activity_type = require_text(activity_type, "type", ACTIVITY_TYPE_MAX_LENGTH)
        minutes = validate_duration(duration)
        day = parse_date(on_date)
        points = points_for_duration(minutes)

        activity = Activity(
            user_id=user.id,
            type=activity_type,
            duration=minutes,
            date=day,
        )
        activity = self.store.insert(new_id(), activity)
        if points > 0:
            self.users.accrue_points(user.id, points)

        logger.info(
            "Recorded %s for user %s: %.1f min, +%d points",
            activity_type, user.id, minutes, points,
        )
        return activity

    def remove(self, activity_id: str) -> None:
        """Delete an activity.  Points already credited are kept."""
        if not self.store.remove(activity_id):
            raise ActivityNotFound()
        logger.info("Removed activity %s", activity_id)

    def list(
        self,
        user_id: str | None = None,
        activity_type: str | None = None,
        date_from: date | str | None = None,
        date_to: date | str | None = None,
    ) -> Iterator[Activity]:
        """Lazily yield activities matching every filter that is set.

        ``user_id`` and ``activity_type`` match exactly; the date bounds are inclusive.
        """
        lower = parse_date(date_from, "date_from") if date_from is not None else None
        upper = parse_date(date_to, "date_to") if date_to is not None else None

        criteria = []
        if user_id is not None:
            criteria.append(Activity.user_id == user_id)
        if activity_type is not None:
            criteria.append(Activity.type == activity_type)
        if lower is not None:
            criteria.append(Activity.date >= lower)
        if upper is not None:
            criteria.append(Activity.date <= upper)
        return self.store.find(*criteria)
