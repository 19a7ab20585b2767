# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from stanblog.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "duplicate_username"


class UserNotFoundError(DomainError):
    code = "user_not_found"


class InvalidCredentialsError(DomainError):
    code = "wrong_credentials"


class MissingTokenError(DomainError):
    code = "missing_token"
    status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(DomainError):
    code = "invalid_token"
    status = HTTPStatus.UNAUTHORIZED
