from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from stanblog.domain.posts.entities import Post, PostContent


class PostFormDTO(BaseModel):
    title: str = Field(min_length=1, max_length=256)
    summary: str = ""
    content: str = ""

    def to_content(self) -> PostContent:
        return PostContent(title=self.title, summary=self.summary, content=self.content)


class UpdatePostFormDTO(PostFormDTO):
    id: int = Field(ge=1)


class AuthorDTO(BaseModel):
    id: int
    username: str


class PostDTO(BaseModel):
    id: int
    title: str
    summary: str
    content: str
    cover: str | None
    author: AuthorDTO
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @classmethod
    def from_entity(cls, post: Post) -> PostDTO:
        return cls(
            id=post.id,
            title=post.title,
            summary=post.summary,
            content=post.content,
            cover=post.cover,
            author=AuthorDTO(id=post.author.id, username=post.author.username),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
