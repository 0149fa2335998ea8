"""Unit tests for tokens, password hashing, request ids, and the activity logger."""

import logging
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from venuehub.application.services.activity_logger import ActivityLogger
from venuehub.infrastructure.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from venuehub.middleware.request_id import sanitize_request_id
from venuehub.shared.context import get_request_id, reset_request_id, set_request_id
from venuehub.shared.enums import ActivityAction
from venuehub.shared.telemetry.logging import RequestIdFilter


class TestTokens:
    """JWT access tokens."""

    def test_round_trip_claims(self) -> None:
        token = create_access_token({"sub": "u1", "business_id": "b1"})
        payload = verify_token(token)
        assert payload["sub"] == "u1"
        assert payload["business_id"] == "b1"
        assert "exp" in payload

    def test_expired_token_rejected(self) -> None:
        token = create_access_token({"sub": "u1"}, expires_delta=timedelta(seconds=-1))
        with pytest.raises(ValueError, match="Invalid token"):
            verify_token(token)

    def test_garbage_rejected(self) -> None:
        with pytest.raises(ValueError):
            verify_token("not-a-jwt")


class TestPasswords:
    """bcrypt with SHA-256 pre-hash."""

    def test_hash_and_verify(self) -> None:
        hashed = get_password_hash("correct horse")
        assert hashed != "correct horse"
        assert verify_password("correct horse", hashed)
        assert not verify_password("wrong horse", hashed)

    def test_long_passwords_differ_after_72_bytes(self) -> None:
        base = "x" * 80
        hashed = get_password_hash(base + "a")
        assert not verify_password(base + "b", hashed)

    def test_malformed_hash_is_false(self) -> None:
        assert verify_password("anything", "not-a-bcrypt-hash") is False


class TestRequestId:
    """Client request ids are forwarded only when safe to log."""

    @pytest.mark.parametrize("raw", ["abc-123", "A_b", "x" * 64])
    def test_safe_ids_forwarded(self, raw: str) -> None:
        assert sanitize_request_id(raw) == raw

    @pytest.mark.parametrize("raw", [None, "", "x" * 65, "bad id", "id\nforged-log-line"])
    def test_unsafe_ids_replaced(self, raw: str | None) -> None:
        generated = sanitize_request_id(raw)
        assert generated != raw
        assert len(generated) == 32

    def test_log_records_carry_request_id(self) -> None:
        token = set_request_id("req-1")
        try:
            record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
            assert RequestIdFilter().filter(record)
            assert record.request_id == "req-1"
            assert get_request_id() == "req-1"
        finally:
            reset_request_id(token)


async def test_activity_logger_swallows_store_errors() -> None:
    """A failing activity write never fails the logged operation."""
    repo = AsyncMock()
    repo.add.side_effect = RuntimeError("store down")
    await ActivityLogger(repo).log("b1", "u1", ActivityAction.CREATED, "partner", "p1")
    repo.add.assert_awaited_once()


async def test_activity_logger_entry_shape() -> None:
    repo = AsyncMock()
    await ActivityLogger(repo).log(
        "b1", "u1", ActivityAction.ARCHIVED, "partner", "p1", "partner archived", {"k": 1}
    )
    entry = repo.add.await_args.args[0]
    assert entry["action"] == "archived"
    assert entry["resource_type"] == "partner"
    assert entry["metadata"] == {"k": 1}
