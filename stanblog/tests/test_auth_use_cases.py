from __future__ import annotations

import pytest

from stanblog.application.services.password_hashing import WerkzeugPasswordHasher
from stanblog.application.services.session_tokens import JwtSessionTokenService
from stanblog.application.use_cases.users.get_profile import GetProfileUseCase
from stanblog.application.use_cases.users.login_user import LoginUserUseCase
from stanblog.application.use_cases.users.register_user import RegisterUserUseCase
from stanblog.domain.users.entities import User
from stanblog.domain.users.exceptions import (
    InvalidCredentialsError,
    MissingTokenError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from stanblog.domain.users.repositories import PasswordHasher, UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._seq = 1

    def find_by_username(self, username: str) -> User | None:
        return self._users.get(username)

    def find_by_id(self, user_id: int) -> User | None:
        return next((u for u in self._users.values() if u.id == user_id), None)

    def add(self, user: User) -> User:
        new_user = User(
            id=self._seq,
            username=user.username,
            password_hash=user.password_hash,
            created_at=user.created_at,
        )
        self._seq += 1
        self._users[new_user.username] = new_user
        return new_user


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def tokens() -> JwtSessionTokenService:
    return JwtSessionTokenService(secret="use-case-secret-0123456789abcdef0123456789")


def test_register_user_success(users: InMemoryUserRepository) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=DeterministicHasher())

    user = use_case.execute("alice", "secret")

    assert user.id == 1
    assert user.username == "alice"
    assert users.find_by_username("alice") is not None


def test_register_user_duplicate_raises(users: InMemoryUserRepository) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=DeterministicHasher())
    use_case.execute("alice", "secret")

    with pytest.raises(UserAlreadyExistsError):
        use_case.execute("alice", "other")


def test_register_user_stores_hash_not_plaintext(users: InMemoryUserRepository) -> None:
    use_case = RegisterUserUseCase(users=users, password_hasher=WerkzeugPasswordHasher())

    user = use_case.execute("alice", "secret")

    assert user.password_hash != "secret"
    assert WerkzeugPasswordHasher().verify("secret", user.password_hash)


def test_login_then_profile_round_trip(
    users: InMemoryUserRepository, tokens: JwtSessionTokenService
) -> None:
    registered = RegisterUserUseCase(
        users=users, password_hasher=DeterministicHasher()
    ).execute("alice", "secret")
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=DeterministicHasher())

    user, token = login.execute("alice", "secret")
    identity = GetProfileUseCase(tokens=tokens).execute(token)

    assert user == registered
    assert identity.username == "alice"
    assert identity.user_id == registered.id


def test_login_user_wrong_password(
    users: InMemoryUserRepository, tokens: JwtSessionTokenService
) -> None:
    RegisterUserUseCase(users=users, password_hasher=DeterministicHasher()).execute(
        "alice", "secret"
    )
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=DeterministicHasher())

    with pytest.raises(InvalidCredentialsError):
        login.execute("alice", "wrong")


def test_login_user_unknown_username(
    users: InMemoryUserRepository, tokens: JwtSessionTokenService
) -> None:
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=DeterministicHasher())

    with pytest.raises(UserNotFoundError):
        login.execute("nobody", "x")


def test_profile_without_token(tokens: JwtSessionTokenService) -> None:
    with pytest.raises(MissingTokenError):
        GetProfileUseCase(tokens=tokens).execute(None)
