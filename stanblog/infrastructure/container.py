# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from stanblog.application.services.password_hashing import WerkzeugPasswordHasher
from stanblog.application.services.session_tokens import JwtSessionTokenService
from stanblog.application.use_cases.posts.create_post import CreatePostUseCase
from stanblog.application.use_cases.posts.get_post import GetPostUseCase
from stanblog.application.use_cases.posts.list_posts import ListPostsUseCase
from stanblog.application.use_cases.posts.update_post import UpdatePostUseCase
from stanblog.application.use_cases.users.get_profile import GetProfileUseCase
from stanblog.application.use_cases.users.login_user import LoginUserUseCase
from stanblog.application.use_cases.users.register_user import RegisterUserUseCase
from stanblog.infrastructure.db import Database
from stanblog.infrastructure.repositories.posts.sqlalchemy_post_repository import (
    SqlAlchemyPostRepository,
)
from stanblog.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from stanblog.infrastructure.storage import LocalCoverStorage
from stanblog.interfaces.http.controllers.auth_controller import AuthController
from stanblog.interfaces.http.controllers.misc_controller import MiscController
from stanblog.interfaces.http.controllers.post_controller import PostController
from stanblog.interfaces.http.session_cookie import SessionCookie
from stanblog.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig) -> None:
        self._config = config

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def database(self) -> Database:
        return Database(self._config.database)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def session_tokens(self) -> JwtSessionTokenService:
        ttl_seconds = self._config.token.ttl_seconds
        return JwtSessionTokenService(
            secret=self._config.secret_key,
            algorithm=self._config.token.algorithm,
            ttl=timedelta(seconds=ttl_seconds) if ttl_seconds else None,
        )

    @cached_property
    def session_cookie(self) -> SessionCookie:
        return SessionCookie(
            name=self._config.token.cookie_name,
            secure=self._config.security.cookie_secure,
            samesite=self._config.security.cookie_samesite,
            max_age=self._config.token.ttl_seconds,
        )

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database.session_factory)

    @cached_property
    def post_repository(self) -> SqlAlchemyPostRepository:
        return SqlAlchemyPostRepository(self.database.session_factory)

    @cached_property
    def cover_storage(self) -> LocalCoverStorage:
        return LocalCoverStorage(
            self._config.upload.directory,
            public_prefix=self._config.upload.public_prefix,
        )

    # Users

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.session_tokens,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def get_profile_use_case(self) -> GetProfileUseCase:
        return GetProfileUseCase(tokens=self.session_tokens)

    # Posts

    @cached_property
    def create_post_use_case(self) -> CreatePostUseCase:
        return CreatePostUseCase(
            posts=self.post_repository,
            users=self.user_repository,
            covers=self.cover_storage,
        )

    @cached_property
    def update_post_use_case(self) -> UpdatePostUseCase:
        return UpdatePostUseCase(posts=self.post_repository, covers=self.cover_storage)

    @cached_property
    def list_posts_use_case(self) -> ListPostsUseCase:
        return ListPostsUseCase(
            posts=self.post_repository,
            limit=self._config.posts_list_limit,
        )

    @cached_property
    def get_post_use_case(self) -> GetPostUseCase:
        return GetPostUseCase(posts=self.post_repository)

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            profile_use_case=self.get_profile_use_case,
            cookie=self.session_cookie,
        )

    @cached_property
    def post_controller(self) -> PostController:
        return PostController(
            create_use_case=self.create_post_use_case,
            update_use_case=self.update_post_use_case,
            list_use_case=self.list_posts_use_case,
            get_use_case=self.get_post_use_case,
            profile_use_case=self.get_profile_use_case,
            cookie=self.session_cookie,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(
            database=self.database,
            upload_root=self.cover_storage.root,
            public_prefix=self._config.upload.public_prefix,
        )
