# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from authportal.domain.accounts.entities import ResetToken
from authportal.domain.accounts.exceptions import ResetTokenNotFoundError
from authportal.domain.accounts.repositories import ResetTokenStore
from authportal.infrastructure.db import as_utc
from authportal.infrastructure.db.models import PasswordResetToken
from authportal.infrastructure.unit_of_work import SessionScopedRepository
from authportal.shared.logging import logger


class SqlAlchemyResetTokenStore(SessionScopedRepository, ResetTokenStore):
    """Single-use reset tokens; rows older than ``ttl`` read as absent."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        ttl: timedelta,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
        session: Session | None = None,
    ) -> None:
        super().__init__(session_factory, session=session)
        self._ttl = ttl
        self._clock = clock

    def _cutoff(self) -> datetime:
        return self._clock() - self._ttl

    def _purge_expired(self, session: Session) -> None:
        purged = session.execute(
            delete(PasswordResetToken).where(PasswordResetToken.created_at <= self._cutoff())
        ).rowcount
        if purged:
            logger.debug(f"reset_tokens: purged {purged} expired tokens")

    def issue(self, account_id: int) -> ResetToken:
        token_value = secrets.token_hex(32)
        now = self._clock()
        with self._scope() as session:
            self._purge_expired(session)
            session.add(
                PasswordResetToken(token=token_value, account_id=account_id, created_at=now)
            )
        return ResetToken(token=token_value, account_id=account_id, created_at=now)

    def find_by_token(self, token: str) -> ResetToken | None:
        with self._scope() as session:
            row = session.execute(
                select(PasswordResetToken).where(
                    PasswordResetToken.token == token,
                    PasswordResetToken.created_at > self._cutoff(),
                )
            ).scalar_one_or_none()
            if not row:
                return None
            return ResetToken(
                token=row.token,
                account_id=row.account_id,
                created_at=as_utc(row.created_at),
            )

    def consume(self, token: str) -> None:
        with self._scope() as session:
            deleted = session.execute(
                delete(PasswordResetToken).where(
                    PasswordResetToken.token == token,
                    PasswordResetToken.created_at > self._cutoff(),
                )
            ).rowcount
            if deleted == 0:
                raise ResetTokenNotFoundError()


__all__ = ["SqlAlchemyResetTokenStore"]
