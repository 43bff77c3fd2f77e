# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from authportal.domain.accounts.exceptions import StoreUnavailableError
from authportal.domain.accounts.repositories import PasswordResetUnitOfWork
from authportal.infrastructure.repositories.accounts.sqlalchemy_credential_store import (
    SqlAlchemyCredentialStore,
)
from authportal.infrastructure.repositories.accounts.sqlalchemy_reset_token_store import (
    SqlAlchemyResetTokenStore,
)
from authportal.infrastructure.unit_of_work import SqlAlchemyUnitOfWork


class SqlAlchemyPasswordResetUnitOfWork(SqlAlchemyUnitOfWork, PasswordResetUnitOfWork):
    """Binds the credential and reset-token stores to one transaction."""

    credentials: SqlAlchemyCredentialStore
    reset_tokens: SqlAlchemyResetTokenStore

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        reset_token_ttl: timedelta,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        super().__init__(session_factory)
        self._reset_token_ttl = reset_token_ttl
        self._clock = clock

    def __enter__(self) -> SqlAlchemyPasswordResetUnitOfWork:
        super().__enter__()
        self.credentials = SqlAlchemyCredentialStore(self.session_factory, session=self.session)
        self.reset_tokens = SqlAlchemyResetTokenStore(
            self.session_factory,
            ttl=self._reset_token_ttl,
            clock=self._clock,
            session=self.session,
        )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        except OperationalError as db_exc:
            raise StoreUnavailableError("password_reset") from db_exc


__all__ = ["SqlAlchemyPasswordResetUnitOfWork"]
