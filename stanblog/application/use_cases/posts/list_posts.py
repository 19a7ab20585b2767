# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from stanblog.domain.posts.entities import Post
from stanblog.domain.posts.repositories import PostRepository

MAX_LIST_LIMIT = 20


class ListPostsUseCase:
    def __init__(self, *, posts: PostRepository, limit: int = MAX_LIST_LIMIT) -> None:
        self._posts = posts
        self._limit = max(1, min(limit, MAX_LIST_LIMIT))

    def execute(self) -> list[Post]:
        return list(self._posts.list_recent(self._limit))[: self._limit]
