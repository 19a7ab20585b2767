# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from stanblog.domain.posts.entities import Post, PostAuthor, PostContent, UploadedFile
from stanblog.domain.posts.repositories import CoverStorage, PostRepository
from stanblog.domain.users.entities import Identity
from stanblog.domain.users.exceptions import UserNotFoundError
from stanblog.domain.users.repositories import UserRepository
from stanblog.shared.logging import logger


class CreatePostUseCase:
    def __init__(
        self,
        *,
        posts: PostRepository,
        users: UserRepository,
        covers: CoverStorage,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._posts = posts
        self._users = users
        self._covers = covers
        self._clock = clock

    def execute(
        self,
        identity: Identity,
        content: PostContent,
        cover: UploadedFile | None = None,
    ) -> Post:
        author = self._users.find_by_id(identity.user_id)
        if author is None:
            raise UserNotFoundError(context={"user_id": identity.user_id})

        cover_path = self._covers.store(cover) if cover is not None else None
        if cover_path is None:
            logger.debug(f"posts.create: no cover supplied by user_id={author.id}")

        now = self._clock()
        draft = Post(
            id=0,
            title=content.title,
            summary=content.summary,
            content=content.content,
            cover=cover_path,
            author=PostAuthor(id=author.id, username=author.username),
            created_at=now,
            updated_at=now,
        )
        return self._posts.add(draft)
