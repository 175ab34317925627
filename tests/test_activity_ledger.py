"""
tests/test_activity_ledger.py — Activity Ledger Service Tests
==============================================================
Recording drives point accrual; failed validation writes nothing;
removal keeps earned points; list filters.
"""

from __future__ import annotations

from datetime import date

import pytest

from conftest import PASSWORD
from momentum.errors import ActivityNotFound, InvalidInput, UserNotFound
from momentum.services.activities import ActivityLedger
from momentum.services.users import UserDirectory


@pytest.fixture
def users(db_session) -> UserDirectory:
    return UserDirectory(db_session)


@pytest.fixture
def ledger(db_session, users) -> ActivityLedger:
    return ActivityLedger(db_session, users)


@pytest.fixture
def alice(users):
    return users.register("Alice", "a@x.com", PASSWORD)


class TestRecord:
    def test_persists_activity(self, ledger, alice):
        activity = ledger.record(alice.id, "run", 30, "2026-01-15")
        assert activity.id
        assert activity.user_id == alice.id
        assert activity.type == "run"
        assert activity.duration == 30
        assert activity.date == date(2026, 1, 15)
        assert activity.created_at is not None
        assert ledger.get(activity.id).id == activity.id

    def test_one_point_per_minute(self, ledger, users, alice):
        ledger.record(alice.id, "run", 30, "2026-01-15")
        assert users.get(alice.id).points == 30

    @pytest.mark.parametrize("durations", [[30, 20], [1, 1, 1], [45, 60, 15, 5]])
    def test_points_accumulate(self, ledger, users, alice, durations):
        for d in durations:
            before = users.get(alice.id).points
            ledger.record(alice.id, "run", d, "2026-01-15")
            assert users.get(alice.id).points == before + d
        assert users.get(alice.id).points == sum(durations)

    def test_fractional_minutes_are_dropped(self, ledger, users, alice):
        ledger.record(alice.id, "walk", 10.75, "2026-01-15")
        assert users.get(alice.id).points == 10

    def test_sub_minute_activity_records_without_points(self, ledger, users, alice):
        activity = ledger.record(alice.id, "stretch", 0.5, "2026-01-15")
        assert ledger.get(activity.id).duration == 0.5
        assert users.get(alice.id).points == 0

    def test_unknown_user_writes_nothing(self, ledger):
        with pytest.raises(UserNotFound):
            ledger.record("ghost", "run", 30, "2026-01-15")
        assert len(ledger.store) == 0

    @pytest.mark.parametrize(
        "activity_type, duration, on_date",
        [
            ("", 30, "2026-01-15"),
            ("run", 0, "2026-01-15"),
            ("run", -5, "2026-01-15"),
            ("run", 30, "not-a-date"),
            ("run", 1e20, "2026-01-15"),
            ("run", 24 * 60 + 1, "2026-01-15"),
            ("x" * 101, 30, "2026-01-15"),
        ],
    )
    def test_invalid_input_writes_nothing(self, ledger, users, alice, activity_type, duration, on_date):
        with pytest.raises(InvalidInput):
            ledger.record(alice.id, activity_type, duration, on_date)
        assert len(ledger.store) == 0
        assert users.get(alice.id).points == 0

    def test_full_day_is_accepted(self, ledger, users, alice):
        ledger.record(alice.id, "hike", 24 * 60, "2026-01-15")
        assert users.get(alice.id).points == 1440

    def test_accepts_date_objects(self, ledger, alice):
        activity = ledger.record(alice.id, "swim", 20, date(2026, 2, 1))
        assert activity.date == date(2026, 2, 1)


class TestRemove:
    def test_points_are_kept(self, ledger, users, alice):
        activity = ledger.record(alice.id, "run", 30, "2026-01-15")
        ledger.remove(activity.id)
        with pytest.raises(ActivityNotFound):
            ledger.get(activity.id)
        assert users.get(alice.id).points == 30

    def test_unknown_activity(self, ledger):
        with pytest.raises(ActivityNotFound):
            ledger.remove("missing")


class TestList:
    @pytest.fixture
    def seeded(self, ledger, users, alice):
        bob = users.register("Bob", "b@x.com", PASSWORD)
        ledger.record(alice.id, "run", 30, "2026-01-10")
        ledger.record(alice.id, "swim", 20, "2026-01-15")
        ledger.record(alice.id, "run", 25, "2026-01-20")
        ledger.record(bob.id, "run", 40, "2026-01-15")
        return alice, bob

    def test_unfiltered_returns_all(self, ledger, seeded):
        assert len(list(ledger.list())) == 4

    def test_by_user(self, ledger, seeded):
        alice, bob = seeded
        assert {a.user_id for a in ledger.list(user_id=bob.id)} == {bob.id}
        assert len(list(ledger.list(user_id=alice.id))) == 3

    def test_by_type(self, ledger, seeded):
        assert sorted(a.duration for a in ledger.list(activity_type="run")) == [25, 30, 40]

    def test_date_range_is_inclusive(self, ledger, seeded):
        hits = list(ledger.list(date_from="2026-01-15", date_to="2026-01-20"))
        assert sorted(a.date.day for a in hits) == [15, 15, 20]

    def test_combined_filters(self, ledger, seeded):
        alice, _ = seeded
        hits = list(ledger.list(user_id=alice.id, activity_type="run", date_to="2026-01-15"))
        assert [a.duration for a in hits] == [30]

    def test_bad_bound(self, ledger, seeded):
        with pytest.raises(InvalidInput, match="date_from"):
            list(ledger.list(date_from="soon"))
