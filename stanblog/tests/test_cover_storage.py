from __future__ import annotations

import io
import shutil
from pathlib import Path

import pytest

from stanblog.domain.posts.entities import UploadedFile
from stanblog.infrastructure.storage import LocalCoverStorage, cover_extension
from stanblog.shared.errors import StorageError


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("photo.png", "png"),
        ("archive.tar.gz", None),
        ("Picture.JPEG", "jpeg"),
        ("anim.GIF", "gif"),
        ("evil.html", None),
        ("script.svg", None),
        (".hidden", None),
        ("README", None),
        ("trailing.", None),
        ("evil.png/../../etc", None),
        ("", None),
    ],
)
def test_cover_extension(filename: str, expected: str | None) -> None:
    assert cover_extension(filename) == expected


def test_store_keeps_extension_and_content(tmp_path: Path) -> None:
    storage = LocalCoverStorage(tmp_path / "uploads")

    path = storage.store(UploadedFile("photo.png", io.BytesIO(b"\x89PNG data")))

    prefix, name = path.split("/")
    assert prefix == "uploads"
    assert name.endswith(".png")
    assert len(name) == 32 + len(".png")
    assert (tmp_path / "uploads" / name).read_bytes() == b"\x89PNG data"
    assert sorted(p.name for p in (tmp_path / "uploads").iterdir()) == [name]


def test_store_without_extension(tmp_path: Path) -> None:
    storage = LocalCoverStorage(tmp_path / "uploads", public_prefix="/media/")

    path = storage.store(UploadedFile("README", io.BytesIO(b"x")))

    assert path.startswith("media/")
    assert "." not in path.split("/")[1]


def test_store_gives_unique_names(tmp_path: Path) -> None:
    storage = LocalCoverStorage(tmp_path)

    first = storage.store(UploadedFile("a.jpg", io.BytesIO(b"1")))
    second = storage.store(UploadedFile("a.jpg", io.BytesIO(b"2")))

    assert first != second


def test_store_failure_raises_storage_error(tmp_path: Path) -> None:
    root = tmp_path / "uploads"
    storage = LocalCoverStorage(root)
    shutil.rmtree(root)

    with pytest.raises(StorageError) as excinfo:
        storage.store(UploadedFile("a.jpg", io.BytesIO(b"1")))

    assert excinfo.value.code == "storage_error"


class _BrokenStream(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        raise OSError("connection reset")


def test_store_failure_removes_partial_file(tmp_path: Path) -> None:
    storage = LocalCoverStorage(tmp_path)

    with pytest.raises(StorageError):
        storage.store(UploadedFile("a.jpg", _BrokenStream()))

    assert list(tmp_path.iterdir()) == []


class _FailingSecondRead(io.RawIOBase):
    def __init__(self) -> None:
        self._reads = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        self._reads += 1
        if self._reads > 1:
            raise ValueError("stream closed")
        buffer[:4] = b"data"
        return 4


def test_store_non_os_failure_removes_partial_file(tmp_path: Path) -> None:
    storage = LocalCoverStorage(tmp_path)

    with pytest.raises(ValueError):
        storage.store(UploadedFile("a.jpg", _FailingSecondRead()))

    assert list(tmp_path.iterdir()) == []


def test_store_drops_non_image_extension(tmp_path: Path) -> None:
    storage = LocalCoverStorage(tmp_path)

    path = storage.store(UploadedFile("evil.html", io.BytesIO(b"<script></script>")))

    assert "." not in path.split("/")[1]
