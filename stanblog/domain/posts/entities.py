# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import BinaryIO


@dataclass(slots=True, frozen=True)
class PostAuthor:

    id: int
    username: str


@dataclass(slots=True, frozen=True)
class Post:
    """A published post with its author resolved.

    ``cover`` is the public path of the stored cover image, or ``None`` when
    the post was created without one.
    """

    id: int
    title: str
    summary: str
    content: str
    cover: str | None
    author: PostAuthor
    created_at: datetime
    updated_at: datetime

    def is_authored_by(self, user_id: int) -> bool:
        return self.author.id == user_id

    def revise(
        self,
        *,
        title: str,
        summary: str,
        content: str,
        cover: str | None,
        updated_at: datetime,
    ) -> Post:
        return replace(
            self,
            title=title,
            summary=summary,
            content=content,
            cover=cover if cover is not None else self.cover,
            updated_at=updated_at,
        )


@dataclass(slots=True, frozen=True)
class PostContent:

    title: str
    summary: str
    content: str


@dataclass(slots=True, frozen=True)
class UploadedFile:
    """A file received with a request, before it is stored."""

    filename: str
    stream: BinaryIO
