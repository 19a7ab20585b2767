from __future__ import annotations

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from stanblog.app import CONTAINER_EXTENSION, create_app
from stanblog.shared.config import AppConfig, DatabaseConfig, SecurityConfig, UploadConfig

TEST_SECRET = "test-signing-secret-0123456789abcdef0123456789"


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        SECRET_KEY=TEST_SECRET,
        database=DatabaseConfig(DATABASE_URL=f"sqlite:///{tmp_path / 'stanblog.db'}"),
        upload=UploadConfig(UPLOAD_DIR=tmp_path / "uploads"),
        security=SecurityConfig(ALLOWED_ORIGINS=["http://localhost:3000"]),
    )


@pytest.fixture()
def app(app_config: AppConfig) -> Iterator[Flask]:
    flask_app = create_app(app_config)
    yield flask_app
    flask_app.extensions[CONTAINER_EXTENSION].database.dispose()


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as test_client:
        yield test_client
