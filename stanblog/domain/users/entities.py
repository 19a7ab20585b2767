# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True, frozen=True)
class User:

    id: int
    username: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class Identity:
    """Caller identity recovered from a verified session token."""

    user_id: int
    username: str
    issued_at: datetime | None = None

    @classmethod
    def for_user(cls, user: User) -> Identity:
        return cls(user_id=user.id, username=user.username)
