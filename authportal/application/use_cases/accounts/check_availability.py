# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authportal.domain.accounts.repositories import CredentialStore
from authportal.domain.accounts.validation import (
    full_phone_number,
    is_valid_country_code,
    is_valid_email,
    is_valid_full_phone,
    is_valid_phone,
    normalize_email,
    normalize_phone,
)


class CheckAvailabilityUseCase:
    """Answer the registration form's live "already taken" lookups."""

    def __init__(self, *, accounts: CredentialStore) -> None:
        self._accounts = accounts

    def username_exists(self, username: str) -> bool:
        username = username.strip()
        return bool(username) and self._accounts.find_by_username(username) is not None

    def email_exists(self, email: str) -> bool:
        email = normalize_email(email)
        if not is_valid_email(email):
            return False
        return self._accounts.find_by_email(email) is not None

    def phone_exists(self, phone: str, country_code: str = "") -> bool:
        """Look up a stored number.

        Without ``country_code`` the phone must already carry it
        (``+15551234567``), which is what the registration form sends.
        """
        if not country_code.strip():
            if not is_valid_full_phone(phone):
                return False
            return self._accounts.find_by_phone(normalize_phone(phone)) is not None

        if not is_valid_phone(phone) or not is_valid_country_code(country_code):
            return False
        return self._accounts.find_by_phone(full_phone_number(country_code, phone)) is not None
