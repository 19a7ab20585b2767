from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import jwt
import pytest

from stanblog.application.services.session_tokens import JwtSessionTokenService
from stanblog.domain.users.entities import Identity
from stanblog.domain.users.exceptions import InvalidTokenError, MissingTokenError

if TYPE_CHECKING:
    from conftest import FakeClock

TEST_SECRET = "test-signing-secret-0123456789abcdef0123456789"


def _service(clock: FakeClock, ttl: timedelta | None = None, secret: str = TEST_SECRET):
    return JwtSessionTokenService(secret=secret, ttl=ttl, clock=clock)


def test_issue_then_verify_returns_identity(clock: FakeClock) -> None:
    tokens = _service(clock)

    token = tokens.issue(Identity(user_id=7, username="alice"))
    identity = tokens.verify(token)

    assert identity.user_id == 7
    assert identity.username == "alice"
    assert identity.issued_at == datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize("token", [None, ""])
def test_verify_without_token_raises_missing(clock: FakeClock, token: str | None) -> None:
    with pytest.raises(MissingTokenError):
        _service(clock).verify(token)


def test_token_from_other_secret_is_rejected(clock: FakeClock) -> None:
    foreign = _service(clock, secret="another-secret-0123456789abcdef0123456789")
    token = foreign.issue(Identity(user_id=1, username="mallory"))

    with pytest.raises(InvalidTokenError):
        _service(clock).verify(token)


@pytest.mark.parametrize("token", ["not-a-jwt", "a.b.c", "eyJhbGciOiJIUzI1NiJ9.e30."])
def test_garbage_token_is_rejected(clock: FakeClock, token: str) -> None:
    with pytest.raises(InvalidTokenError):
        _service(clock).verify(token)


def test_token_without_ttl_has_no_expiry(clock: FakeClock) -> None:
    tokens = _service(clock)
    token = tokens.issue(Identity(user_id=1, username="alice"))

    claims = jwt.decode(token, options={"verify_signature": False})
    clock.advance(60 * 60 * 24 * 365 * 10)

    assert "exp" not in claims
    assert tokens.verify(token).user_id == 1


def test_token_with_ttl_expires(clock: FakeClock) -> None:
    tokens = _service(clock, ttl=timedelta(seconds=60))
    token = tokens.issue(Identity(user_id=1, username="alice"))

    clock.advance(30)
    assert tokens.verify(token).username == "alice"

    clock.advance(31)
    with pytest.raises(InvalidTokenError) as excinfo:
        tokens.verify(token)
    assert excinfo.value.context == {"reason": "expired"}


def test_signed_token_with_malformed_claims_is_rejected(clock: FakeClock) -> None:
    token = jwt.encode(
        {"id": "7", "username": "alice", "iat": int(clock().timestamp())},
        TEST_SECRET,
        algorithm="HS256",
    )

    with pytest.raises(InvalidTokenError):
        _service(clock).verify(token)


def test_empty_secret_is_refused(clock: FakeClock) -> None:
    with pytest.raises(ValueError):
        _service(clock, secret="")
