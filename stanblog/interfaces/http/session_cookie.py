# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from flask import Response, request


@dataclass(slots=True, frozen=True)
class SessionCookie:
    """Reads and writes the cookie that transports the session token."""

    name: str = "token"
    secure: bool = False
    samesite: str = "Lax"
    max_age: int | None = None

    def read(self) -> str | None:
        return request.cookies.get(self.name) or None

    def attach(self, response: Response, token: str) -> Response:
        response.set_cookie(
            self.name,
            token,
            httponly=True,
            samesite=self.samesite,
            secure=self.secure,
            max_age=self.max_age,
        )
        return response

    def clear(self, response: Response) -> Response:
        response.set_cookie(
            self.name,
            "",
            expires=0,
            httponly=True,
            samesite=self.samesite,
            secure=self.secure,
        )
        return response
