"""Use-case resolving the caller behind a session token."""

from __future__ import annotations

from stanblog.domain.users.entities import Identity
from stanblog.domain.users.repositories import SessionTokenService


class GetProfileUseCase:
    def __init__(self, *, tokens: SessionTokenService) -> None:
        self._tokens = tokens

    def execute(self, token: str | None) -> Identity:
        return self._tokens.verify(token)
