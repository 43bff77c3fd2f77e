# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .accounts.entities import (
    Account,
    AccountRef,
    Gender,
    NewAccount,
    ResetNotification,
    ResetToken,
)
from .accounts.exceptions import (
    AccountIntegrityError,
    DuplicateKeyError,
    InvalidCredentialsError,
    MissingCredentialsError,
    PasswordHashIntegrityError,
    ResetTokenNotFoundError,
    StoreUnavailableError,
)

__all__ = [
    "Account",
    "AccountRef",
    "Gender",
    "NewAccount",
    "ResetNotification",
    "ResetToken",
    "AccountIntegrityError",
    "DuplicateKeyError",
    "InvalidCredentialsError",
    "MissingCredentialsError",
    "PasswordHashIntegrityError",
    "ResetTokenNotFoundError",
    "StoreUnavailableError",
]
