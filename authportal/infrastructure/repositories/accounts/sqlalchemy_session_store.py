# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from authportal.domain.accounts.entities import AccountRef
from authportal.domain.accounts.repositories import SessionStore
from authportal.infrastructure.db import as_utc
from authportal.infrastructure.db.models import LoginSession
from authportal.infrastructure.unit_of_work import SessionScopedRepository
from authportal.shared.logging import logger


class SqlAlchemySessionStore(SessionScopedRepository, SessionStore):
    """Server-side login sessions with a fixed lifetime from creation."""

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

    def _purge_expired(self, session: Session, now: datetime) -> None:
        purged = session.execute(
            delete(LoginSession).where(LoginSession.expires_at <= now)
        ).rowcount
        if purged:
            logger.debug(f"sessions: purged {purged} expired sessions")

    def create(self, account: AccountRef) -> str:
        session_id = secrets.token_urlsafe(32)
        now = self._clock()
        with self._scope() as session:
            self._purge_expired(session, now)
            session.add(
                LoginSession(
                    session_id=session_id,
                    account_id=account.id,
                    username=account.username,
                    email=account.email,
                    created_at=now,
                    expires_at=now + self._ttl,
                )
            )
        return session_id

    def get(self, session_id: str) -> AccountRef | None:
        with self._scope() as session:
            row = session.execute(
                select(LoginSession).where(LoginSession.session_id == session_id)
            ).scalar_one_or_none()
            if not row:
                return None
            if as_utc(row.expires_at) <= self._clock():
                session.delete(row)
                return None
            return AccountRef(id=row.account_id, username=row.username, email=row.email)

    def destroy(self, session_id: str) -> None:
        with self._scope() as session:
            session.execute(delete(LoginSession).where(LoginSession.session_id == session_id))


__all__ = ["SqlAlchemySessionStore"]
