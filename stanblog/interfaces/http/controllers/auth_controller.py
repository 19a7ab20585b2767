# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from stanblog.application.use_cases.users.get_profile import GetProfileUseCase
from stanblog.application.use_cases.users.login_user import LoginUserUseCase
from stanblog.application.use_cases.users.register_user import RegisterUserUseCase
from stanblog.infrastructure.audit import AuditAction, audit_log
from stanblog.interfaces.http.dto.auth import (
    LoginRequestDTO,
    ProfileDTO,
    RegisterRequestDTO,
    UserDTO,
)
from stanblog.interfaces.http.session_cookie import SessionCookie
from stanblog.shared.errors import AppError
from stanblog.shared.errors.validation import raise_validation_error
from stanblog.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        profile_use_case: GetProfileUseCase,
        cookie: SessionCookie,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._profile_use_case = profile_use_case
        self._cookie = cookie

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.username, dto.password)

        audit_log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            details={"username": user.username},
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify(UserDTO.from_entity(user).model_dump()), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            user, token = self._login_use_case.execute(dto.username, dto.password)
        except AppError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username, "error": exc.code},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=user.id,
            ip_address=ip_address,
            details={"username": user.username},
        )

        response = jsonify(UserDTO.from_entity(user).model_dump())
        self._cookie.attach(response, token)
        logger.info(f"auth.login: ok user_id={user.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        response = jsonify("ok")
        self._cookie.clear(response)

        audit_log(AuditAction.LOGOUT, ip_address=_get_client_ip())
        logger.info("auth.logout: ok")
        return response, 200

    def profile(self) -> tuple[Response, int]:
        identity = self._profile_use_case.execute(self._cookie.read())
        g.user_id = identity.user_id
        return jsonify(ProfileDTO.from_identity(identity).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/profile", view_func=self.profile, methods=["GET"])
        return bp
