"""
tests/test_follow_graph.py — Follow Graph Service Tests
========================================================
"""

from __future__ import annotations

import pytest

from conftest import PASSWORD
from momentum.errors import (
    AlreadyFollowing,
    FollowerNotFound,
    FollowingNotFound,
    FollowNotFound,
    SelfFollow,
)
from momentum.services.follows import FollowGraph
from momentum.services.users import UserDirectory


@pytest.fixture
def users(db_session) -> UserDirectory:
    return UserDirectory(db_session)


@pytest.fixture
def graph(db_session, users) -> FollowGraph:
    return FollowGraph(db_session, users)


@pytest.fixture
def pair(users):
    return (
        users.register("Alice", "a@x.com", PASSWORD),
        users.register("Bob", "b@x.com", PASSWORD),
    )


class TestFollow:
    def test_creates_edge(self, graph, pair):
        a, b = pair
        edge = graph.follow(a.id, b.id)
        assert (edge.follower_id, edge.following_id) == (a.id, b.id)
        assert edge.created_at is not None

    def test_self_follow(self, graph, pair):
        a, _ = pair
        with pytest.raises(SelfFollow):
            graph.follow(a.id, a.id)
        assert len(graph.store) == 0

    def test_duplicate_edge(self, graph, pair):
        a, b = pair
        graph.follow(a.id, b.id)
        with pytest.raises(AlreadyFollowing):
            graph.follow(a.id, b.id)
        assert len(graph.store) == 1

    def test_reverse_edge_is_independent(self, graph, pair):
        a, b = pair
        graph.follow(a.id, b.id)
        graph.follow(b.id, a.id)
        assert len(graph.store) == 2

    def test_unknown_follower(self, graph, pair):
        _, b = pair
        with pytest.raises(FollowerNotFound):
            graph.follow("ghost", b.id)

    def test_unknown_following(self, graph, pair):
        a, _ = pair
        with pytest.raises(FollowingNotFound):
            graph.follow(a.id, "ghost")

    def test_existence_checked_before_self_follow(self, graph):
        with pytest.raises(FollowerNotFound):
            graph.follow("ghost", "ghost")


class TestQueries:
    def test_followers_and_following(self, graph, users, pair):
        a, b = pair
        c = users.register("Carol", "c@x.com", PASSWORD)
        graph.follow(a.id, c.id)
        graph.follow(b.id, c.id)
        graph.follow(c.id, a.id)

        assert {f.follower_id for f in graph.followers_of(c.id)} == {a.id, b.id}
        assert [f.following_id for f in graph.following_of(c.id)] == [a.id]
        assert list(graph.followers_of(b.id)) == []
        assert len(list(graph.list())) == 3

    def test_unfollow(self, graph, pair):
        a, b = pair
        edge = graph.follow(a.id, b.id)
        graph.unfollow(edge.id)
        assert graph.find_edge(a.id, b.id) is None
        # Edge can be re-created after removal.
        graph.follow(a.id, b.id)

    def test_unfollow_unknown(self, graph):
        with pytest.raises(FollowNotFound):
            graph.unfollow("missing")
