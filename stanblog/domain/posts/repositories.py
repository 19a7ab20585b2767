# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Post, UploadedFile


class PostRepository(Protocol):
    def add(self, post: Post) -> Post: ...
    def find_by_id(self, post_id: int) -> Post | None: ...
    def update(self, post: Post) -> Post: ...
    def list_recent(self, limit: int) -> Sequence[Post]: ...


class CoverStorage(Protocol):
    def store(self, upload: UploadedFile) -> str: ...
