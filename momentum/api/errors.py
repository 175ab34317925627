"""
momentum.api.errors — Domain Failure → HTTP Response
=====================================================

One exception handler turns every :class:`~momentum.errors.DomainError`
into ``{"error": {"code", "message"}}`` with a status picked by walking the
error's class hierarchy, so new subclasses inherit their parent's status.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from momentum.errors import (
    AlreadyFollowing,
    AlreadyJoined,
    DomainError,
    DuplicateEmail,
    InvalidCredentials,
    InvalidInput,
    NotFound,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    DuplicateEmail: status.HTTP_409_CONFLICT,
    AlreadyJoined: status.HTTP_409_CONFLICT,
    AlreadyFollowing: status.HTTP_409_CONFLICT,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
}


def status_for(exc: DomainError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    code = status_for(exc)
    logger.warning("%s %s -> %d %s", request.method, request.url.path, code, exc.code)
    return JSONResponse(status_code=code, content={"error": exc.to_dict()})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
