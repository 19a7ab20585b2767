# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.posts.create_post import CreatePostUseCase
from .use_cases.posts.get_post import GetPostUseCase
from .use_cases.posts.list_posts import ListPostsUseCase
from .use_cases.posts.update_post import UpdatePostUseCase
from .use_cases.users.get_profile import GetProfileUseCase
from .use_cases.users.login_user import LoginUserUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "CreatePostUseCase",
    "GetPostUseCase",
    "GetProfileUseCase",
    "ListPostsUseCase",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "UpdatePostUseCase",
]
