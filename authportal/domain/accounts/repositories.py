# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from .entities import Account, AccountRef, NewAccount, ResetNotification, ResetToken


class CredentialStore(Protocol):
    def find_by_id(self, account_id: int) -> Account | None: ...
    def find_by_username(self, username: str) -> Account | None: ...
    def find_by_email(self, email: str) -> Account | None: ...
    def find_by_phone(self, phone: str) -> Account | None: ...
    def create(self, account: NewAccount) -> Account: ...
    def update_password_hash(self, account_id: int, password_hash: str) -> None: ...


class ResetTokenStore(Protocol):
    def issue(self, account_id: int) -> ResetToken: ...
    def find_by_token(self, token: str) -> ResetToken | None: ...
    def consume(self, token: str) -> None: ...


class SessionStore(Protocol):
    def create(self, account: AccountRef) -> str: ...
    def get(self, session_id: str) -> AccountRef | None: ...
    def destroy(self, session_id: str) -> None: ...


class PasswordResetUnitOfWork(Protocol):
    """Transaction spanning the credential and reset-token stores."""

    credentials: CredentialStore
    reset_tokens: ResetTokenStore

    def __enter__(self) -> PasswordResetUnitOfWork: ...

    def __exit__(self, exc_type, exc, tb) -> None: ...


class UnitOfWorkFactory(Protocol):
    def __call__(self) -> AbstractContextManager[PasswordResetUnitOfWork]: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
    def burn(self, password: str) -> None: ...


class ResetNotifier(Protocol):
    def send(self, notification: ResetNotification) -> None: ...
