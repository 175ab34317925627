"""
momentum.errors — Typed Domain Failures
========================================

Every core operation either returns a value or raises exactly one
:class:`DomainError` subclass, having written nothing.  The API turns these
into HTTP responses in :mod:`momentum.api.errors`; nothing in the core
catches them.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for caller-facing, recoverable failures."""

    code = "DOMAIN_ERROR"
    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------
class InvalidInput(DomainError):
    code = "INVALID_INPUT"
    default_message = "Invalid input"


class InvalidEmail(InvalidInput):
    code = "INVALID_EMAIL"
    default_message = "Invalid input: 'email' must be a valid email address"


class SelfFollow(InvalidInput):
    code = "SELF_FOLLOW"
    default_message = "Invalid input: a user cannot follow themselves"


# ---------------------------------------------------------------------------
# Missing references
# ---------------------------------------------------------------------------
class NotFound(DomainError):
    code = "NOT_FOUND"
    default_message = "Resource not found"


class UserNotFound(NotFound):
    code = "USER_NOT_FOUND"
    default_message = "User with the given ID does not exist"


class ChallengeNotFound(NotFound):
    code = "CHALLENGE_NOT_FOUND"
    default_message = "Challenge not found"


class ActivityNotFound(NotFound):
    code = "ACTIVITY_NOT_FOUND"
    default_message = "Activity not found"


class FollowNotFound(NotFound):
    code = "FOLLOW_NOT_FOUND"
    default_message = "Follow relationship not found"


class FollowerNotFound(UserNotFound):
    code = "FOLLOWER_NOT_FOUND"
    default_message = "Follower user does not exist"


class FollowingNotFound(UserNotFound):
    code = "FOLLOWING_NOT_FOUND"
    default_message = "User to follow does not exist"


# ---------------------------------------------------------------------------
# Uniqueness / membership conflicts
# ---------------------------------------------------------------------------
class DuplicateEmail(DomainError):
    code = "DUPLICATE_EMAIL"
    default_message = "User with this email already exists"


class AlreadyJoined(DomainError):
    code = "ALREADY_JOINED"
    default_message = "User has already joined this challenge"


class AlreadyFollowing(DomainError):
    code = "ALREADY_FOLLOWING"
    default_message = "User is already following this user"


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------
class InvalidCredentials(DomainError):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"
