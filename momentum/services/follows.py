"""
momentum.services.follows — Follow Graph
=========================================

Directed follow edges.  No self-loops and at most one edge per
(follower, following) pair; the reverse edge is independent.

Error precedence in :meth:`FollowGraph.follow`: follower exists →
following exists → not self → not already following.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from sqlalchemy.orm import Session

from momentum.database.models import Follow, new_id
from momentum.database.store import EntityStore
from momentum.errors import (
    AlreadyFollowing,
    FollowerNotFound,
    FollowingNotFound,
    FollowNotFound,
    SelfFollow,
)
from momentum.services.users import UserDirectory

logger = logging.getLogger(__name__)


class FollowGraph:
    """Follow records keyed by id."""

    def __init__(self, session: Session, users: UserDirectory) -> None:
        self.store: EntityStore[Follow] = EntityStore(session, Follow)
        self.users = users

    def get(self, follow_id: str) -> Follow:
        follow = self.store.get(follow_id)
        if follow is None:
            raise FollowNotFound()
        return follow

    def follow(self, follower_id: str, following_id: str) -> Follow:
        if not self.users.exists(follower_id):
            raise FollowerNotFound()
        if not self.users.exists(following_id):
            raise FollowingNotFound()
        if follower_id == following_id:
            raise SelfFollow()
        if self.find_edge(follower_id, following_id) is not None:
            raise AlreadyFollowing()

        edge = Follow(follower_id=follower_id, following_id=following_id)
        edge = self.store.insert(new_id(), edge)
        logger.info("User %s now follows %s", follower_id, following_id)
        return edge

    def unfollow(self, follow_id: str) -> None:
        if not self.store.remove(follow_id):
            raise FollowNotFound()
        logger.info("Removed follow %s", follow_id)

    def find_edge(self, follower_id: str, following_id: str) -> Follow | None:
        return self.store.first(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        )

    def followers_of(self, user_id: str) -> Iterator[Follow]:
        """Edges pointing at *user_id*."""
        return self.store.find(Follow.following_id == user_id)

    def following_of(self, user_id: str) -> Iterator[Follow]:
        """Edges leaving *user_id*."""
        return self.store.find(Follow.follower_id == user_id)

    def list(self) -> Iterator[Follow]:
        return self.store.values()
