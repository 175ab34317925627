"""
tests/test_tracker.py — Fitness Tracker Unit-of-Work Tests
===========================================================
End-to-end flows through :class:`FitnessTracker`, commit/rollback
behaviour and the orphan policy on user removal.
"""

from __future__ import annotations

import threading

import pytest

from conftest import PASSWORD
from momentum.errors import AlreadyJoined, DuplicateEmail, InvalidInput, UserNotFound


class TestScenarios:
    def test_points_flow_into_leaderboard(self, tracker):
        alice = tracker.register("Alice", "alice@example.com", PASSWORD)
        tracker.record_activity(alice.id, "run", 30, "2026-01-15")
        assert tracker.get_user(alice.id).points == 30

        tracker.record_activity(alice.id, "swim", 20, "2026-01-16")
        assert tracker.get_user(alice.id).points == 50

        (top,) = tracker.leaderboard(size=1)
        assert top.rank == 1
        assert top.user.id == alice.id
        assert top.user.points == 50

    def test_challenge_and_follow_flow(self, tracker):
        alice = tracker.register("Alice", "a@x.com", PASSWORD)
        bob = tracker.register("Bob", "b@x.com", PASSWORD)

        challenge = tracker.create_challenge(alice.id, "Plank", "Hold it")
        tracker.join_challenge(challenge.id, bob.id)
        with pytest.raises(AlreadyJoined):
            tracker.join_challenge(challenge.id, bob.id)
        assert tracker.get_challenge(challenge.id).participants == [bob.id]

        edge = tracker.follow(bob.id, alice.id)
        assert [f.id for f in tracker.followers_of(alice.id)] == [edge.id]
        assert [f.id for f in tracker.following_of(bob.id)] == [edge.id]
        tracker.unfollow(edge.id)
        assert tracker.followers_of(alice.id) == []

    def test_results_usable_after_unit_closes(self, tracker):
        alice = tracker.register("Alice", "a@x.com", PASSWORD)
        users = tracker.list_users()
        assert users[0].email == alice.email
        assert tracker.find_user_by_email("a@x.com").id == alice.id
        assert tracker.authenticate("a@x.com", PASSWORD).id == alice.id


class TestUnitOfWork:
    def test_commits_on_success(self, tracker):
        with tracker.unit() as unit:
            alice = unit.users.register("Alice", "a@x.com", PASSWORD)
            unit.activities.record(alice.id, "run", 15, "2026-01-15")
        assert tracker.get_user(alice.id).points == 15
        assert len(tracker.list_activities(user_id=alice.id)) == 1

    def test_rolls_back_on_error(self, tracker):
        with pytest.raises(DuplicateEmail):
            with tracker.unit() as unit:
                unit.users.register("Alice", "a@x.com", PASSWORD)
                unit.users.register("Alice Again", "a@x.com", PASSWORD)
        assert tracker.list_users() == []

    def test_failed_record_leaves_no_trace(self, tracker):
        alice = tracker.register("Alice", "a@x.com", PASSWORD)
        with pytest.raises(InvalidInput):
            tracker.record_activity(alice.id, "run", -1, "2026-01-15")
        assert tracker.list_activities() == []
        assert tracker.get_user(alice.id).points == 0

    def test_concurrent_duplicate_registration(self, tracker):
        outcomes: list[str] = []

        def attempt():
            try:
                tracker.register("Dup", "dup@x.com", PASSWORD)
                outcomes.append("ok")
            except DuplicateEmail:
                outcomes.append("dup")

        threads = [threading.Thread(target=attempt) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(outcomes) == ["dup", "dup", "dup", "ok"]
        assert len(tracker.list_users()) == 1

    def test_lifecycle(self, tracker):
        tracker.start()  # idempotent create_all
        tracker.register("Alice", "a@x.com", PASSWORD)
        assert len(tracker.list_users()) == 1


class TestRemovalPolicy:
    def test_user_removal_orphans_dependants(self, tracker):
        alice = tracker.register("Alice", "a@x.com", PASSWORD)
        bob = tracker.register("Bob", "b@x.com", PASSWORD)
        activity = tracker.record_activity(alice.id, "run", 30, "2026-01-15")
        challenge = tracker.create_challenge(alice.id, "Plank", "Hold it")
        tracker.join_challenge(challenge.id, alice.id)
        edge = tracker.follow(bob.id, alice.id)

        tracker.remove_user(alice.id)

        with pytest.raises(UserNotFound):
            tracker.get_user(alice.id)
        assert tracker.get_activity(activity.id).user_id == alice.id
        assert tracker.get_challenge(challenge.id).participants == [alice.id]
        assert tracker.get_follow(edge.id).following_id == alice.id

    def test_activity_removal_keeps_points(self, tracker):
        alice = tracker.register("Alice", "a@x.com", PASSWORD)
        activity = tracker.record_activity(alice.id, "run", 30, "2026-01-15")
        tracker.remove_activity(activity.id)
        assert tracker.list_activities() == []
        assert tracker.get_user(alice.id).points == 30
