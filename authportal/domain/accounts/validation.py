# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Input rules for account forms.

Every function here is pure: it takes raw field values and reports problems
without touching storage. The HTTP layer and the availability checks both go
through these helpers so the rules live in one place.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from authportal.shared.errors.base import ValidationError

from .entities import Gender

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^[0-9]{10}$")
PHONE_SEPARATORS_RE = re.compile(r"[-\s()]")
COUNTRY_CODE_RE = re.compile(r"^\+\d{1,4}$")
# country code followed by the national number, as stored
FULL_PHONE_RE = re.compile(r"^\+\d{1,4}[0-9]{10}$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = "!@#$%^&*()_+}{\"':;?/>.<,"

MSG_ALL_REQUIRED = "All fields are required."
MSG_EMAIL_INVALID = "Please enter a valid email address."
MSG_PHONE_INVALID = "Please enter a valid 10-digit phone number (numbers only)."
MSG_COUNTRY_CODE_INVALID = "Please enter a valid country code."
MSG_GENDER_INVALID = "Invalid gender selected."
MSG_PASSWORD_MISMATCH = "Passwords do not match."
MSG_PASSWORD_WEAK = (
    "Password must be at least 8 characters, include uppercase, lowercase, "
    "number, and special character."
)


@dataclass(slots=True, frozen=True)
class FieldIssue:
    field: str
    message: str


@dataclass(slots=True)
class ValidationResult:
    issues: list[FieldIssue] = field(default_factory=list)

    def add(self, field_name: str, message: str) -> None:
        self.issues.append(FieldIssue(field=field_name, message=message))

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def messages(self) -> list[str]:
        return [issue.message for issue in self.issues]

    @property
    def fields(self) -> list[str]:
        return sorted({issue.field for issue in self.issues})

    def raise_if_invalid(self) -> None:
        if self.issues:
            raise ValidationError(self.messages, context={"fields": self.fields})


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_phone(phone: str) -> str:
    return PHONE_SEPARATORS_RE.sub("", phone.strip())


def full_phone_number(country_code: str, phone: str) -> str:
    return f"{country_code.strip()}{normalize_phone(phone)}"


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email))


def is_valid_phone(phone: str) -> bool:
    return bool(PHONE_RE.match(normalize_phone(phone)))


def is_valid_country_code(country_code: str) -> bool:
    return bool(COUNTRY_CODE_RE.match(country_code.strip()))


def is_valid_full_phone(phone: str) -> bool:
    return bool(FULL_PHONE_RE.match(normalize_phone(phone)))


def is_valid_gender(gender: str) -> bool:
    return gender in Gender.values()


def is_strong_password(password: str) -> bool:
    return (
        len(password) >= PASSWORD_MIN_LENGTH
        and any(ch.isdigit() for ch in password)
        and any("a" <= ch <= "z" for ch in password)
        and any("A" <= ch <= "Z" for ch in password)
        and any(ch in PASSWORD_SYMBOLS for ch in password)
    )


def _check_new_password(result: ValidationResult, password: str, confirm_password: str) -> None:
    if password != confirm_password:
        result.add("confirmPassword", MSG_PASSWORD_MISMATCH)
    if password and not is_strong_password(password):
        result.add("password", MSG_PASSWORD_WEAK)


def validate_registration(
    *,
    username: str,
    email: str,
    phone: str,
    gender: str,
    password: str,
    confirm_password: str,
    country_code: str,
) -> ValidationResult:
    result = ValidationResult()
    values = {
        "username": username,
        "email": email,
        "phone": phone,
        "gender": gender,
        "password": password,
        "confirmPassword": confirm_password,
        "countryCode": country_code,
    }
    missing = [name for name, value in values.items() if not value]
    if missing:
        result.add(missing[0], MSG_ALL_REQUIRED)

    if email and not is_valid_email(email):
        result.add("email", MSG_EMAIL_INVALID)
    if phone and not is_valid_phone(phone):
        result.add("phone", MSG_PHONE_INVALID)
    if country_code and not is_valid_country_code(country_code):
        result.add("countryCode", MSG_COUNTRY_CODE_INVALID)
    if gender and not is_valid_gender(gender):
        result.add("gender", MSG_GENDER_INVALID)
    _check_new_password(result, password, confirm_password)
    return result


def validate_password_reset(
    *, token: str, password: str, confirm_password: str
) -> ValidationResult:
    result = ValidationResult()
    if not token or not password or not confirm_password:
        result.add("token" if not token else "password", MSG_ALL_REQUIRED)
    _check_new_password(result, password, confirm_password)
    return result


__all__ = [
    "FieldIssue",
    "ValidationResult",
    "full_phone_number",
    "is_strong_password",
    "is_valid_country_code",
    "is_valid_email",
    "is_valid_full_phone",
    "is_valid_gender",
    "is_valid_phone",
    "normalize_email",
    "normalize_phone",
    "validate_password_reset",
    "validate_registration",
]
