"""
tests/test_jwt_startup.py — JWT Secret Validation at Startup
=============================================================
The API must refuse to start when JWT_SECRET is missing, blank, too
short, or a known weak default.
"""

from __future__ import annotations

import os
from unittest.mock import patch

import jwt
import pytest

from momentum.api import deps


class TestJWTSecretValidation:
    def test_rejects_missing_secret(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("JWT_SECRET", None)
            with pytest.raises(RuntimeError, match="JWT_SECRET environment variable is not set"):
                deps._load_jwt_secret()

    def test_rejects_empty_secret(self):
        with patch.dict(os.environ, {"JWT_SECRET": ""}):
            with pytest.raises(RuntimeError, match="not set"):
                deps._load_jwt_secret()

    @pytest.mark.parametrize("weak", ["momentum-dev-secret-change-me", "change-me", "secret"])
    def test_rejects_known_weak_defaults(self, weak):
        with patch.dict(os.environ, {"JWT_SECRET": weak}):
            with pytest.raises(RuntimeError, match="known weak default"):
                deps._load_jwt_secret()

    def test_rejects_short_secret(self):
        with patch.dict(os.environ, {"JWT_SECRET": "tooshort"}):
            with pytest.raises(RuntimeError, match="too short"):
                deps._load_jwt_secret()

    def test_accepts_strong_secret(self):
        with patch.dict(os.environ, {"JWT_SECRET": "a" * 64}):
            assert deps._load_jwt_secret() == "a" * 64


class TestAccessToken:
    def test_round_trips_subject(self):
        token = deps.create_access_token("user-1", ttl_hours=1)
        payload = jwt.decode(token, deps.JWT_SECRET, algorithms=[deps.JWT_ALGORITHM])
        assert payload["sub"] == "user-1"
        assert deps.get_current_user_id(f"Bearer {token}") == "user-1"

    def test_expired_token_is_rejected(self):
        from fastapi import HTTPException

        token = deps.create_access_token("user-1", ttl_hours=-1)
        with pytest.raises(HTTPException) as exc_info:
            deps.get_current_user_id(f"Bearer {token}")
        assert exc_info.value.status_code == 401
