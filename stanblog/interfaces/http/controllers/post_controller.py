# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from stanblog.application.use_cases.posts.create_post import CreatePostUseCase
from stanblog.application.use_cases.posts.get_post import GetPostUseCase
from stanblog.application.use_cases.posts.list_posts import ListPostsUseCase
from stanblog.application.use_cases.posts.update_post import UpdatePostUseCase
from stanblog.application.use_cases.users.get_profile import GetProfileUseCase
from stanblog.domain.posts.entities import UploadedFile
from stanblog.domain.posts.exceptions import NotAuthorError
from stanblog.domain.users.entities import Identity
from stanblog.infrastructure.audit import AuditAction, audit_log
from stanblog.interfaces.http.dto.posts import PostDTO, PostFormDTO, UpdatePostFormDTO
from stanblog.interfaces.http.session_cookie import SessionCookie
from stanblog.shared.errors import ValidationError as AppValidationError
from stanblog.shared.errors.validation import raise_validation_error
from stanblog.shared.logging import logger

COVER_FIELD = "file"


def _uploaded_cover() -> UploadedFile | None:
    unexpected = [name for name in request.files if name != COVER_FIELD]
    if unexpected:
        raise AppValidationError("unexpected_file_field", context={"fields": sorted(unexpected)})

    files = request.files.getlist(COVER_FIELD)
    if len(files) > 1:
        raise AppValidationError("single_file_expected", context={"received": len(files)})
    if not files or not files[0].filename:
        return None
    return UploadedFile(filename=files[0].filename, stream=files[0].stream)


class PostController:
    def __init__(
        self,
        *,
        create_use_case: CreatePostUseCase,
        update_use_case: UpdatePostUseCase,
        list_use_case: ListPostsUseCase,
        get_use_case: GetPostUseCase,
        profile_use_case: GetProfileUseCase,
        cookie: SessionCookie,
    ) -> None:
        self._create_use_case = create_use_case
        self._update_use_case = update_use_case
        self._list_use_case = list_use_case
        self._get_use_case = get_use_case
        self._profile_use_case = profile_use_case
        self._cookie = cookie

    def _require_identity(self) -> Identity:
        identity = self._profile_use_case.execute(self._cookie.read())
        g.user_id = identity.user_id
        return identity

    def create(self) -> tuple[Response, int]:
        identity = self._require_identity()
        try:
            form = PostFormDTO.model_validate(request.form.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        post = self._create_use_case.execute(identity, form.to_content(), _uploaded_cover())

        audit_log(
            AuditAction.POST_CREATED,
            user_id=identity.user_id,
            details={"post_id": post.id, "cover": post.cover},
        )
        logger.info(f"posts.create: ok post_id={post.id} user_id={identity.user_id}")
        return jsonify(PostDTO.from_entity(post).to_payload()), 200

    def update(self) -> tuple[Response, int]:
        identity = self._require_identity()
        try:
            form = UpdatePostFormDTO.model_validate(request.form.to_dict())
        except ValidationError as exc:
            raise_validation_error(exc)

        try:
            post = self._update_use_case.execute(
                form.id, identity, form.to_content(), _uploaded_cover()
            )
        except NotAuthorError:
            audit_log(
                AuditAction.POST_UPDATE_DENIED,
                user_id=identity.user_id,
                details={"post_id": form.id},
                success=False,
            )
            raise

        audit_log(
            AuditAction.POST_UPDATED,
            user_id=identity.user_id,
            details={"post_id": post.id, "cover": post.cover},
        )
        logger.info(f"posts.update: ok post_id={post.id} user_id={identity.user_id}")
        return jsonify(PostDTO.from_entity(post).to_payload()), 200

    def list_recent(self) -> tuple[Response, int]:
        posts = self._list_use_case.execute()
        return jsonify([PostDTO.from_entity(post).to_payload() for post in posts]), 200

    def get_one(self, post_id: int) -> tuple[Response, int]:
        post = self._get_use_case.execute(post_id)
        return jsonify(PostDTO.from_entity(post).to_payload()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("posts", __name__)
        bp.add_url_rule("/post", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/post", view_func=self.update, methods=["PUT"])
        bp.add_url_rule("/post", view_func=self.list_recent, methods=["GET"])
        bp.add_url_rule("/post/<int:post_id>", view_func=self.get_one, methods=["GET"])
        return bp
