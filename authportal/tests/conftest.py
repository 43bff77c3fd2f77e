from __future__ import annotations

import os

os.environ.setdefault("ENABLE_RATE_LIMIT", "0")
os.environ.setdefault("PASSWORD_HASH_METHOD", "pbkdf2:sha256:1000")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.orm import Session, sessionmaker

from authportal.infrastructure.db import build_engine, build_session_factory, init_db
from authportal.shared.config import DatabaseConfig, load_config

load_config.cache_clear()


class FrozenClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def session_factory() -> Iterator[sessionmaker[Session]]:
    engine = build_engine(DatabaseConfig(url="sqlite://"))
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()
