# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Database unit of work implementation."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager, nullcontext

from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from authportal.domain.accounts.exceptions import StoreUnavailableError
from authportal.shared.logging import logger


class SqlAlchemyUnitOfWork(AbstractContextManager):
    """SQLAlchemy-backed unit of work: commit on success, roll back on error."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self.session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        logger.debug("uow: session opened")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._session is not None
        try:
            if exc:
                logger.debug(f"uow: rollback due to {exc_type.__name__}")
                self._session.rollback()
            else:
                self._session.commit()
                logger.debug("uow: committed")
        except Exception:
            logger.exception("uow: exception while finalising")
            self._session.rollback()
            raise
        finally:
            self._session.close()
            logger.debug("uow: session closed")
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            msg = "UnitOfWork session accessed before entering context"
            raise RuntimeError(msg)
        return self._session


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    """Provide a context manager yielding a session."""

    try:
        with SqlAlchemyUnitOfWork(factory) as uow:
            yield uow.session
    except OperationalError as exc:
        logger.error(f"uow: database unavailable ({type(exc.orig).__name__})")
        raise StoreUnavailableError("database") from exc


class SessionScopedRepository:
    """Base for stores that run standalone or inside a caller's unit of work.

    Without a bound ``session`` every call opens and commits its own
    transaction; with one, the caller owns commit and rollback.
    """

    def __init__(
        self, session_factory: Callable[[], Session], *, session: Session | None = None
    ) -> None:
        self._session_factory = session_factory
        self._bound_session = session

    def _scope(self) -> AbstractContextManager[Session]:
        if self._bound_session is not None:
            return nullcontext(self._bound_session)
        return unit_of_work_scope(self._session_factory)


__all__ = ["SessionScopedRepository", "SqlAlchemyUnitOfWork", "unit_of_work_scope"]
