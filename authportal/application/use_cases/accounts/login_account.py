# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from authportal.domain.accounts.entities import Account
from authportal.domain.accounts.exceptions import InvalidCredentialsError, MissingCredentialsError
from authportal.domain.accounts.repositories import CredentialStore, PasswordHasher, SessionStore


class LoginAccountUseCase:
    def __init__(
        self,
        *,
        accounts: CredentialStore,
        sessions: SessionStore,
        password_hasher: PasswordHasher,
    ) -> None:
        self._accounts = accounts
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(self, username: str, password: str) -> tuple[Account, str]:
        if not username or not password:
            raise MissingCredentialsError()

        account = self._accounts.find_by_username(username)
        if account is None:
            # keep the unknown-user path as slow as a bad password
            self._password_hasher.burn(password)
            raise InvalidCredentialsError()

        if not self._password_hasher.verify(password, account.password_hash):
            raise InvalidCredentialsError()

        session_id = self._sessions.create(account.as_ref())
        return account, session_id
