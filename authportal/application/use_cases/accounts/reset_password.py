# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authportal.domain.accounts.entities import Account, ResetToken
from authportal.domain.accounts.exceptions import AccountIntegrityError, ResetTokenNotFoundError
from authportal.domain.accounts.repositories import (
    CredentialStore,
    PasswordHasher,
    ResetTokenStore,
    UnitOfWorkFactory,
)
from authportal.domain.accounts.validation import validate_password_reset
from authportal.shared.logging import logger


class ResetPasswordUseCase:
    def __init__(
        self,
        *,
        accounts: CredentialStore,
        reset_tokens: ResetTokenStore,
        password_hasher: PasswordHasher,
        unit_of_work: UnitOfWorkFactory,
    ) -> None:
        self._accounts = accounts
        self._reset_tokens = reset_tokens
        self._password_hasher = password_hasher
        self._unit_of_work = unit_of_work

    def check_token(self, token: str) -> ResetToken:
        reset_token = self._reset_tokens.find_by_token(token) if token else None
        if reset_token is None:
            raise ResetTokenNotFoundError()
        return reset_token

    def execute(self, token: str, password: str, confirm_password: str) -> Account:
        validate_password_reset(
            token=token, password=password, confirm_password=confirm_password
        ).raise_if_invalid()

        reset_token = self.check_token(token)
        account = self._accounts.find_by_id(reset_token.account_id)
        if account is None:
            logger.error(
                f"auth.reset_password: token references missing account_id={reset_token.account_id}"
            )
            raise AccountIntegrityError(reset_token.account_id)

        new_hash = self._password_hasher.hash(password)
        # Both writes commit together; a consumed token rolls the hash back.
        with self._unit_of_work() as uow:
            uow.credentials.update_password_hash(account.id, new_hash)
            uow.reset_tokens.consume(reset_token.token)

        logger.info(f"auth.reset_password: password updated for account_id={account.id}")
        return account
