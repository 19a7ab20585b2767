# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session, joinedload

from stanblog.domain.posts.entities import Post as DomainPost
from stanblog.domain.posts.entities import PostAuthor
from stanblog.domain.posts.exceptions import PostNotFoundError
from stanblog.domain.posts.repositories import PostRepository
from stanblog.infrastructure.db.models import Post
from stanblog.infrastructure.repositories.users.sqlalchemy_user_repository import as_utc
from stanblog.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: Post) -> DomainPost:
    return DomainPost(
        id=row.id,
        title=row.title,
        summary=row.summary,
        content=row.content,
        cover=row.cover,
        author=PostAuthor(id=row.author.id, username=row.author.username),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlAlchemyPostRepository(PostRepository):
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def add(self, post: DomainPost) -> DomainPost:
        with unit_of_work_scope(self._session_factory) as session:
            row = Post(
                title=post.title,
                summary=post.summary,
                content=post.content,
                cover=post.cover,
                author_id=post.author.id,
                created_at=post.created_at,
                updated_at=post.updated_at,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def find_by_id(self, post_id: int) -> DomainPost | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = (
                session.query(Post)
                .options(joinedload(Post.author))
                .filter(Post.id == post_id)
                .first()
            )
            return _to_domain(row) if row else None

    def update(self, post: DomainPost) -> DomainPost:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Post, post.id, options=[joinedload(Post.author)])
            if row is None:
                raise PostNotFoundError(post.id)
            row.title = post.title
            row.summary = post.summary
            row.content = post.content
            row.cover = post.cover
            row.updated_at = post.updated_at
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def list_recent(self, limit: int) -> list[DomainPost]:
        with unit_of_work_scope(self._session_factory) as session:
            rows = (
                session.query(Post)
                .options(joinedload(Post.author))
                .order_by(Post.created_at.desc(), Post.id.desc())
                .limit(limit)
                .all()
            )
            return [_to_domain(row) for row in rows]
