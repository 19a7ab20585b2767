from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from stanblog.domain.users.entities import Identity, User


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value


class LoginRequestDTO(RegisterRequestDTO):
    pass


class UserDTO(BaseModel):
    id: int
    username: str

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(id=user.id, username=user.username)


class ProfileDTO(BaseModel):
    id: int
    username: str
    iat: int | None = None

    @classmethod
    def from_identity(cls, identity: Identity) -> ProfileDTO:
        issued_at = int(identity.issued_at.timestamp()) if identity.issued_at else None
        return cls(id=identity.user_id, username=identity.username, iat=issued_at)
