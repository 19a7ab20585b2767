# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Cover image storage on the local filesystem."""

from __future__ import annotations

import os
import secrets
import shutil
from pathlib import Path

from stanblog.domain.posts.entities import UploadedFile
from stanblog.domain.posts.repositories import CoverStorage
from stanblog.shared.errors import StorageError
from stanblog.shared.logging import logger

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp"})


def cover_extension(filename: str | None) -> str | None:
    """Return the lowercased image extension of ``filename``.

    ``None`` unless the last dot-delimited segment is one of
    ``IMAGE_EXTENSIONS``; such uploads are stored without an extension and
    served as ``application/octet-stream``.
    """
    if not filename or "." not in filename:
        return None
    ext = filename.rsplit(".", 1)[1].lower()
    if ext not in IMAGE_EXTENSIONS:
        return None
    return ext


class LocalCoverStorage(CoverStorage):
    """Stores uploaded covers within the configured upload directory.

    Each upload is first written under a random temporary name and then
    renamed to ``<name>.<ext>``. The returned path is the public one,
    ``<public_prefix>/<name>.<ext>``.
    """

    def __init__(self, root: Path, public_prefix: str = "uploads") -> None:
        self._root = root
        self._public_prefix = public_prefix.strip("/")
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def store(self, upload: UploadedFile) -> str:
        temp_path = self._root / secrets.token_hex(16)
        ext = cover_extension(upload.filename)
        final_path = temp_path.with_name(f"{temp_path.name}.{ext}") if ext else temp_path

        try:
            with temp_path.open("xb") as target:
                shutil.copyfileobj(upload.stream, target)
            if final_path != temp_path:
                os.replace(temp_path, final_path)
        except OSError as exc:
            logger.error(f"storage: failed to store cover {upload.filename!r}: {exc}")
            temp_path.unlink(missing_ok=True)
            raise StorageError(type(exc).__name__) from exc
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

        logger.debug(f"storage: stored cover path={final_path}")
        return f"{self._public_prefix}/{final_path.name}"


__all__ = ["LocalCoverStorage", "cover_extension"]
