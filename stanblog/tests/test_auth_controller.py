from __future__ import annotations

from datetime import UTC, datetime
from typing import cast
from unittest.mock import MagicMock

import pytest
from flask import Flask

from stanblog.application.use_cases.users.get_profile import GetProfileUseCase
from stanblog.application.use_cases.users.login_user import LoginUserUseCase
from stanblog.application.use_cases.users.register_user import RegisterUserUseCase
from stanblog.domain.users.entities import Identity, User
from stanblog.domain.users.exceptions import InvalidCredentialsError, MissingTokenError
from stanblog.interfaces.http.controllers.auth_controller import AuthController
from stanblog.interfaces.http.session_cookie import SessionCookie
from stanblog.shared.middleware.error_handler import configure_error_handling


@pytest.fixture()
def flask_app() -> Flask:
    app = Flask(__name__)
    configure_error_handling(app)
    return app


def _user(username: str = "alice") -> User:
    return User(id=1, username=username, password_hash="hash", created_at=datetime.now(UTC))


def _controller(**overrides) -> AuthController:
    kwargs = {
        "register_use_case": MagicMock(),
        "login_use_case": MagicMock(),
        "profile_use_case": MagicMock(),
        "cookie": SessionCookie(),
    }
    kwargs.update(overrides)
    return AuthController(**kwargs)


def test_register_returns_public_user(flask_app: Flask) -> None:
    register_called: dict[str, tuple[str, str]] = {}

    class StubRegister:
        def execute(self, username: str, password: str) -> User:
            register_called["args"] = (username, password)
            return _user(username)

    controller = _controller(register_use_case=cast(RegisterUserUseCase, StubRegister()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/register", json={"username": " alice ", "password": "pw"})

    assert response.status_code == 200
    assert register_called["args"] == ("alice", "pw")
    assert response.get_json() == {"id": 1, "username": "alice"}
    assert "Set-Cookie" not in response.headers


def test_login_sets_token_cookie(flask_app: Flask) -> None:
    class StubLogin:
        def execute(self, username: str, password: str) -> tuple[User, str]:
            return _user(username), "token123"

    controller = _controller(login_use_case=cast(LoginUserUseCase, StubLogin()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"username": "alice", "password": "pw"})

    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "username": "alice"}
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("token=token123")
    assert "HttpOnly" in cookie


def test_login_invalid_payload_returns_422(flask_app: Flask) -> None:
    login = MagicMock()
    flask_app.register_blueprint(_controller(login_use_case=login).as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"username": "a"})

    assert response.status_code == 422
    assert response.get_json()["error"] == "validation_error"
    login.execute.assert_not_called()


def test_login_wrong_credentials_returns_400(flask_app: Flask) -> None:
    class StubLogin:
        def execute(self, username: str, password: str) -> tuple[User, str]:
            raise InvalidCredentialsError()

    controller = _controller(login_use_case=cast(LoginUserUseCase, StubLogin()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/login", json={"username": "alice", "password": "nope"})

    assert response.status_code == 400
    assert response.get_json()["error"] == "wrong_credentials"
    assert "Set-Cookie" not in response.headers


def test_profile_reads_cookie(flask_app: Flask) -> None:
    seen: list[str | None] = []

    class StubProfile:
        def execute(self, token: str | None) -> Identity:
            seen.append(token)
            if not token:
                raise MissingTokenError()
            return Identity(
                user_id=7,
                username="bob",
                issued_at=datetime(2024, 5, 1, tzinfo=UTC),
            )

    controller = _controller(profile_use_case=cast(GetProfileUseCase, StubProfile()))
    flask_app.register_blueprint(controller.as_blueprint())

    with flask_app.test_client() as client:
        anonymous = client.get("/profile")
        client.set_cookie("token", "abc")
        authed = client.get("/profile")

    assert anonymous.status_code == 401
    assert anonymous.get_json()["error"] == "missing_token"
    assert authed.status_code == 200
    assert authed.get_json() == {
        "id": 7,
        "username": "bob",
        "iat": int(datetime(2024, 5, 1, tzinfo=UTC).timestamp()),
    }
    assert seen == [None, "abc"]


def test_logout_clears_cookie(flask_app: Flask) -> None:
    flask_app.register_blueprint(_controller().as_blueprint())

    with flask_app.test_client() as client:
        response = client.post("/logout")

    assert response.status_code == 200
    assert response.get_json() == "ok"
    cookie = response.headers["Set-Cookie"]
    assert cookie.startswith("token=;")
    assert "Expires=Thu, 01 Jan 1970" in cookie
