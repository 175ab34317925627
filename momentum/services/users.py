"""
momentum.services.users — User Directory
=========================================

Owns the ``users`` store: registration with unique emails, profile edits,
removal, point accrual and credential checks.

Email uniqueness is answered through the unique ``email`` index rather than
a scan; the rejection semantics are the same.  Emails compare
case-sensitively.

Removal orphans dependants: activities, challenges, follows and participant
entries keep the removed user's id.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from functools import lru_cache

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from momentum.constants import DEFAULT_MIN_PASSWORD_LENGTH, NAME_MAX_LENGTH
from momentum.database.models import User, new_id
from momentum.database.store import EntityStore
from momentum.engine.validation import (
    require_text,
    validate_email,
    validate_password,
    validate_positive_int,
)
from momentum.errors import DuplicateEmail, InvalidCredentials, UserNotFound

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """Hash compared against when the email is unknown, so both login
    failure paths do the same work."""
    return generate_password_hash("momentum-no-such-user")


class UserDirectory:
    """User records keyed by id, with unique emails and point balances."""

    def __init__(
        self,
        session: Session,
        *,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ) -> None:
        self._session = session
        self.store: EntityStore[User] = EntityStore(session, User)
        self.min_password_length = min_password_length

    # -- reads --------------------------------------------------------------
    def get(self, user_id: str) -> User:
        user = self.store.get(user_id)
        if user is None:
            raise UserNotFound()
        return user

    def exists(self, user_id: str) -> bool:
        return user_id in self.store

    def list(self) -> Iterator[User]:
        return self.store.values()

    def find_by_email(self, email: str) -> User | None:
        return self.store.first(User.email == email)

    # -- writes -------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> User:
        """Create a user with zero points.

        Raises
        ------
        InvalidInput
            Blank name, or a password shorter than ``min_password_length``.
        InvalidEmail
            Email fails the address syntax check.
        DuplicateEmail
            Another user already has exactly this email.
        """
        name = require_text(name, "name", NAME_MAX_LENGTH)
        email = validate_email(email)
        password = validate_password(password, self.min_password_length)

        if self.find_by_email(email) is not None:
            raise DuplicateEmail()

        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            points=0,
            seq=self._next_seq(),
        )
        user = self.store.insert(new_id(), user)
        logger.info("Registered user %s (%s)", user.id, user.name)
        return user

    def update(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
    ) -> User:
        """Overwrite *name* and/or *email* in place; ``None`` keeps a field.

        The new email must not belong to a different user.
        """
        user = self.get(user_id)
        new_name = require_text(name, "name", NAME_MAX_LENGTH) if name is not None else user.name
        new_email = validate_email(email) if email is not None else user.email

        if new_email != user.email:
            clash = self.store.first(User.email == new_email, User.id != user_id)
            if clash is not None:
                raise DuplicateEmail()

        user.name = new_name
        user.email = new_email
        self._session.flush()
        logger.info("Updated profile for user %s", user_id)
        return user

    def remove(self, user_id: str) -> None:
        if not self.store.remove(user_id):
            raise UserNotFound()
        logger.info("Removed user %s", user_id)

    def accrue_points(self, user_id: str, amount: int) -> User:
        """Add *amount* (> 0) to the user's balance.

        The only writer of ``points`` after registration.
        """
        amount = validate_positive_int(amount, "amount")
        user = self.get(user_id)
        user.points += amount
        self._session.flush()
        logger.debug("User %s +%d points (total %d)", user_id, amount, user.points)
        return user

    # -- credentials --------------------------------------------------------
    def authenticate(self, email: str, password: str) -> User:
        """Return the user whose stored hash matches *password*.

        Raises :class:`InvalidCredentials` for an unknown email and for a
        wrong password alike.
        """
        user = self.find_by_email(email) if isinstance(email, str) else None
        stored = user.password_hash if user is not None else _dummy_hash()
        matched = isinstance(password, str) and check_password_hash(stored, password)
        if user is None or not matched:
            raise InvalidCredentials()
        return user

    # -- internals ----------------------------------------------------------
    def _next_seq(self) -> int:
        current = self._session.scalar(select(func.coalesce(func.max(User.seq), 0)))
        return (current or 0) + 1
