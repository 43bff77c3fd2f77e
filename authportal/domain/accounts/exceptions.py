# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from authportal.shared.errors.base import DomainError, InfrastructureError

FIELD_LABELS = {
    "username": "Username",
    "email": "Email",
    "phone": "Phone",
}


def already_registered_message(field: str, value: str) -> str:
    label = FIELD_LABELS.get(field, field.capitalize())
    return f"{label} '{value}' is already registered."


class DuplicateKeyError(DomainError):
    code = "duplicate_account"

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(
            already_registered_message(field, value),
            context={"field": field},
        )


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid username or password."


class MissingCredentialsError(DomainError):
    code = "missing_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Username and password are required."


class ResetTokenNotFoundError(DomainError):
    code = "invalid_reset_token"
    message = "Invalid or expired password reset token."


class AccountIntegrityError(InfrastructureError):
    def __init__(self, account_id: int) -> None:
        super().__init__("account_integrity_error", context={"account_id": account_id})


class PasswordHashIntegrityError(InfrastructureError):
    def __init__(self, reason: str) -> None:
        super().__init__("password_hash_integrity_error", context={"reason": reason})


class StoreUnavailableError(InfrastructureError):
    def __init__(self, operation: str) -> None:
        super().__init__("store_unavailable", context={"operation": operation})
