# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from authportal.domain.accounts.entities import Account, Gender, NewAccount
from authportal.domain.accounts.exceptions import DuplicateKeyError, already_registered_message
from authportal.domain.accounts.repositories import CredentialStore, PasswordHasher
from authportal.domain.accounts.validation import (
    ValidationResult,
    full_phone_number,
    is_valid_country_code,
    is_valid_email,
    is_valid_phone,
    normalize_email,
    validate_registration,
)
from authportal.shared.logging import logger


@dataclass(slots=True, frozen=True)
class RegistrationInput:
    username: str
    email: str
    phone: str
    gender: str
    password: str
    confirm_password: str
    country_code: str


class RegisterAccountUseCase:
    def __init__(
        self,
        *,
        accounts: CredentialStore,
        password_hasher: PasswordHasher,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._accounts = accounts
        self._password_hasher = password_hasher
        self._clock = clock

    def execute(self, data: RegistrationInput) -> Account:
        result = validate_registration(
            username=data.username,
            email=data.email,
            phone=data.phone,
            gender=data.gender,
            password=data.password,
            confirm_password=data.confirm_password,
            country_code=data.country_code,
        )
        email = normalize_email(data.email)
        phone = full_phone_number(data.country_code, data.phone)

        # Fast path for friendlier messages; the store's unique constraints decide.
        self._collect_taken_fields(result, data, email, phone)
        result.raise_if_invalid()

        hashed = self._password_hasher.hash(data.password)
        try:
            account = self._accounts.create(
                NewAccount(
                    username=data.username,
                    email=email,
                    phone=phone,
                    gender=Gender(data.gender),
                    password_hash=hashed,
                    created_at=self._clock(),
                )
            )
        except DuplicateKeyError as exc:
            logger.info(f"auth.register: lost uniqueness race on field={exc.field}")
            raise

        logger.info(f"auth.register: created account_id={account.id}")
        return account

    def _collect_taken_fields(
        self, result: ValidationResult, data: RegistrationInput, email: str, phone: str
    ) -> None:
        if data.username and self._accounts.find_by_username(data.username):
            result.add("username", already_registered_message("username", data.username))
        if email and is_valid_email(email) and self._accounts.find_by_email(email):
            result.add("email", already_registered_message("email", email))
        if (
            data.phone
            and is_valid_phone(data.phone)
            and is_valid_country_code(data.country_code)
            and self._accounts.find_by_phone(phone)
        ):
            result.add("phone", already_registered_message("phone", phone))
