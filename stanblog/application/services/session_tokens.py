# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed session tokens carried in the ``token`` cookie."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from stanblog.domain.users.entities import Identity
from stanblog.domain.users.exceptions import InvalidTokenError, MissingTokenError
from stanblog.domain.users.repositories import SessionTokenService
from stanblog.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JwtSessionTokenService(SessionTokenService):
    """Issues and verifies HMAC-signed JWTs holding ``{id, username, iat}``.

    With ``ttl=None`` tokens carry no ``exp`` claim and stay valid for as long
    as the signing secret is unchanged.
    """

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret:
            raise ValueError("session token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, identity: Identity) -> str:
        now = self._clock()
        payload: dict[str, Any] = {
            "id": identity.user_id,
            "username": identity.username,
            "iat": int(now.timestamp()),
        }
        if self._ttl is not None:
            payload["exp"] = int((now + self._ttl).timestamp())
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> Identity:
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                # time claims are checked against the injected clock below
                options={"require": ["iat"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError as exc:
            logger.info(f"session.verify: rejected token ({type(exc).__name__})")
            raise InvalidTokenError() from exc

        user_id = payload.get("id")
        username = payload.get("username")
        issued_at = payload.get("iat")
        if (
            not _is_int(user_id)
            or not isinstance(username, str)
            or not _is_int(issued_at)
        ):
            logger.warning("session.verify: signed token has malformed claims")
            raise InvalidTokenError(context={"reason": "malformed_claims"})

        expires_at = payload.get("exp")
        if expires_at is not None:
            if not _is_int(expires_at):
                raise InvalidTokenError(context={"reason": "malformed_claims"})
            if self._clock().timestamp() >= expires_at:
                logger.info(f"session.verify: token expired for user_id={user_id}")
                raise InvalidTokenError(context={"reason": "expired"})

        return Identity(
            user_id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


__all__ = ["JwtSessionTokenService"]
