"""
momentum.services.challenges — Challenge Board
===============================================

Challenges and their participant lists.  Joining is idempotent-reject: a
second join by the same user raises :class:`AlreadyJoined` and leaves the
list untouched.  The creator is not enrolled automatically.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from sqlalchemy.orm import Session

from momentum.constants import TITLE_MAX_LENGTH
from momentum.database.models import Challenge, new_id
from momentum.database.store import EntityStore
from momentum.engine.validation import require_text
from momentum.errors import AlreadyJoined, ChallengeNotFound
from momentum.services.users import UserDirectory

logger = logging.getLogger(__name__)


class ChallengeBoard:
    """Challenge records keyed by id."""

    def __init__(self, session: Session, users: UserDirectory) -> None:
        self._session = session
        self.store: EntityStore[Challenge] = EntityStore(session, Challenge)
        self.users = users

    def get(self, challenge_id: str) -> Challenge:
        challenge = self.store.get(challenge_id)
        if challenge is None:
            raise ChallengeNotFound()
        return challenge

    def create(self, creator_id: str, title: str, description: str) -> Challenge:
        creator = self.users.get(creator_id)
        title = require_text(title, "title", TITLE_MAX_LENGTH)
        description = require_text(description, "description")

        challenge = Challenge(
            creator_id=creator.id,
            title=title,
            description=description,
            participants=[],
        )
        challenge = self.store.insert(new_id(), challenge)
        logger.info("User %s created challenge %s (%r)", creator.id, challenge.id, title)
        return challenge

    def remove(self, challenge_id: str) -> None:
        if not self.store.remove(challenge_id):
            raise ChallengeNotFound()
        logger.info("Removed challenge %s", challenge_id)

    def join(self, challenge_id: str, user_id: str) -> Challenge:
        """Append *user_id* to the challenge's participants.

        Checks run challenge → user → membership, so a missing challenge
        wins over a missing user.
        """
        challenge = self.get(challenge_id)
        user = self.users.get(user_id)
        current = list(challenge.participants or [])
        if user.id in current:
            raise AlreadyJoined()

        # Assign a new list; in-place mutation of a JSON column isn't tracked.
        challenge.participants = [*current, user.id]
        self._session.flush()
        logger.info("User %s joined challenge %s", user.id, challenge.id)
        return challenge

    def list(
        self,
        creator_id: str | None = None,
        title_contains: str | None = None,
    ) -> Iterator[Challenge]:
        """Lazily yield challenges matching the filters that are set.

        ``title_contains`` is a case-sensitive substring match, applied in
        Python so it behaves the same on every database backend.
        """
        criteria = []
        if creator_id is not None:
            criteria.append(Challenge.creator_id == creator_id)
        for challenge in self.store.find(*criteria):
            if title_contains is None or title_contains in challenge.title:
                yield challenge
