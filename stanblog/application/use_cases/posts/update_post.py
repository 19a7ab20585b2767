# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from stanblog.domain.posts.entities import Post, PostContent, UploadedFile
from stanblog.domain.posts.exceptions import NotAuthorError, PostNotFoundError
from stanblog.domain.posts.repositories import CoverStorage, PostRepository
from stanblog.domain.users.entities import Identity


class UpdatePostUseCase:
    def __init__(
        self,
        *,
        posts: PostRepository,
        covers: CoverStorage,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._posts = posts
        self._covers = covers
        self._clock = clock

    def execute(
        self,
        post_id: int,
        identity: Identity,
        content: PostContent,
        cover: UploadedFile | None = None,
    ) -> Post:
        post = self._posts.find_by_id(post_id)
        if post is None:
            raise PostNotFoundError(post_id)

        # ownership is settled before anything touches the upload directory
        if not post.is_authored_by(identity.user_id):
            raise NotAuthorError(post_id)

        cover_path = self._covers.store(cover) if cover is not None else None
        revised = post.revise(
            title=content.title,
            summary=content.summary,
            content=content.content,
            cover=cover_path,
            updated_at=self._clock(),
        )
        return self._posts.update(revised)
