# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .posts.entities import Post, PostAuthor, PostContent, UploadedFile
from .users.entities import Identity, User

__all__ = [
    "Identity",
    "Post",
    "PostAuthor",
    "PostContent",
    "UploadedFile",
    "User",
]
