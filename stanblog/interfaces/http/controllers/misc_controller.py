# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, jsonify, send_from_directory

from stanblog.infrastructure.db import Database
from stanblog.infrastructure.health import check_database


class MiscController:
    def __init__(self, *, database: Database, upload_root: Path, public_prefix: str = "uploads") -> None:
        self._database = database
        self._upload_root = upload_root.resolve()
        self._public_prefix = public_prefix.strip("/")

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        bp.add_url_rule(
            f"/{self._public_prefix}/<path:filename>",
            view_func=self.cover,
            methods=["GET"],
        )
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            check_database(self._database)
            status["database"] = "ok"
        except Exception as exc:  # pragma: no cover
            status["ok"] = False
            status["database"] = f"error: {type(exc).__name__}"
        return jsonify(status), 200 if status["ok"] else 503

    def cover(self, filename: str):
        response = send_from_directory(self._upload_root, filename)
        response.headers["Content-Security-Policy"] = "sandbox"
        return response
