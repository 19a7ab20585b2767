# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from stanblog.shared.errors.base import DomainError


class PostNotFoundError(DomainError):
    code = "post_not_found"
    status = HTTPStatus.NOT_FOUND

    def __init__(self, post_id: int) -> None:
        super().__init__(context={"post_id": post_id})


class NotAuthorError(DomainError):
    code = "not_author"

    def __init__(self, post_id: int) -> None:
        super().__init__(context={"post_id": post_id})
