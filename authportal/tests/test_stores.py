from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import select

from authportal.domain.accounts.entities import AccountRef, Gender, NewAccount
from authportal.domain.accounts.exceptions import (
    AccountIntegrityError,
    DuplicateKeyError,
    ResetTokenNotFoundError,
)
from authportal.infrastructure.db.models import Account, LoginSession, PasswordResetToken
from authportal.infrastructure.repositories.accounts.password_reset_uow import (
    SqlAlchemyPasswordResetUnitOfWork,
)
from authportal.infrastructure.repositories.accounts.sqlalchemy_credential_store import (
    SqlAlchemyCredentialStore,
)
from authportal.infrastructure.repositories.accounts.sqlalchemy_reset_token_store import (
    SqlAlchemyResetTokenStore,
)
from authportal.infrastructure.repositories.accounts.sqlalchemy_session_store import (
    SqlAlchemySessionStore,
)


def _new_account(clock, **overrides) -> NewAccount:
    values = {
        "username": "alice",
        "email": "alice@example.com",
        "phone": "+15551234567",
        "gender": Gender.FEMALE,
        "password_hash": "pbkdf2:sha256:1000$salt$digest",
        "created_at": clock(),
    }
    values.update(overrides)
    return NewAccount(**values)


@pytest.fixture()
def credentials(session_factory) -> SqlAlchemyCredentialStore:
    return SqlAlchemyCredentialStore(session_factory)


def test_credential_store_roundtrip(credentials: SqlAlchemyCredentialStore, clock) -> None:
    created = credentials.create(_new_account(clock, email="Alice@Example.com"))

    assert created.id is not None
    assert created.email == "alice@example.com"
    assert credentials.find_by_username("alice") == created
    assert credentials.find_by_email("ALICE@example.com") == created
    assert credentials.find_by_phone("+15551234567") == created
    assert credentials.find_by_id(created.id).created_at == clock()
    assert credentials.find_by_username("bob") is None


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"email": "b@example.com", "phone": "+15550000000"}, "username"),
        ({"username": "bob", "phone": "+15550000000"}, "email"),
        ({"username": "bob", "email": "b@example.com"}, "phone"),
    ],
)
def test_credential_store_unique_constraints(
    credentials: SqlAlchemyCredentialStore, clock, overrides: dict[str, str], field: str
) -> None:
    credentials.create(_new_account(clock))

    with pytest.raises(DuplicateKeyError) as excinfo:
        credentials.create(_new_account(clock, **overrides))

    assert excinfo.value.field == field


def test_update_password_hash_for_missing_account(credentials: SqlAlchemyCredentialStore) -> None:
    with pytest.raises(AccountIntegrityError):
        credentials.update_password_hash(999, "x$y$z")


def test_reset_token_expires_after_ttl(session_factory, credentials, clock) -> None:
    account = credentials.create(_new_account(clock))
    tokens = SqlAlchemyResetTokenStore(session_factory, ttl=timedelta(hours=1), clock=clock)

    token = tokens.issue(account.id)
    assert len(token.token) == 64
    assert tokens.find_by_token(token.token) == token

    clock.advance(minutes=59)
    assert tokens.find_by_token(token.token) is not None

    clock.advance(minutes=1)
    assert tokens.find_by_token(token.token) is None
    with pytest.raises(ResetTokenNotFoundError):
        tokens.consume(token.token)

    fresh = tokens.issue(account.id)
    with session_factory() as session:
        rows = session.execute(select(PasswordResetToken.token)).scalars().all()
    assert rows == [fresh.token]


def test_reset_token_consumed_once(session_factory, credentials, clock) -> None:
    account = credentials.create(_new_account(clock))
    tokens = SqlAlchemyResetTokenStore(session_factory, ttl=timedelta(hours=1), clock=clock)
    token = tokens.issue(account.id)

    tokens.consume(token.token)

    with pytest.raises(ResetTokenNotFoundError):
        tokens.consume(token.token)


def test_reset_tokens_removed_with_account(session_factory, credentials, clock) -> None:
    account = credentials.create(_new_account(clock))
    tokens = SqlAlchemyResetTokenStore(session_factory, ttl=timedelta(hours=1), clock=clock)
    token = tokens.issue(account.id)

    with session_factory() as session:
        session.delete(session.get(Account, account.id))
        session.commit()

    assert tokens.find_by_token(token.token) is None


def test_password_reset_unit_of_work_rolls_back_together(
    session_factory, credentials, clock
) -> None:
    account = credentials.create(_new_account(clock))
    tokens = SqlAlchemyResetTokenStore(session_factory, ttl=timedelta(hours=1), clock=clock)
    token = tokens.issue(account.id)
    tokens.consume(token.token)

    uow = SqlAlchemyPasswordResetUnitOfWork(
        session_factory, reset_token_ttl=timedelta(hours=1), clock=clock
    )
    with pytest.raises(ResetTokenNotFoundError):
        with uow:
            uow.credentials.update_password_hash(account.id, "new$hash$value")
            uow.reset_tokens.consume(token.token)

    assert credentials.find_by_id(account.id).password_hash == "pbkdf2:sha256:1000$salt$digest"


def test_password_reset_unit_of_work_commits(session_factory, credentials, clock) -> None:
    account = credentials.create(_new_account(clock))
    tokens = SqlAlchemyResetTokenStore(session_factory, ttl=timedelta(hours=1), clock=clock)
    token = tokens.issue(account.id)

    uow = SqlAlchemyPasswordResetUnitOfWork(
        session_factory, reset_token_ttl=timedelta(hours=1), clock=clock
    )
    with uow:
        uow.credentials.update_password_hash(account.id, "new$hash$value")
        uow.reset_tokens.consume(token.token)

    assert credentials.find_by_id(account.id).password_hash == "new$hash$value"
    with session_factory() as session:
        assert session.execute(select(PasswordResetToken)).first() is None


def test_session_store_lifecycle(session_factory, credentials, clock) -> None:
    account = credentials.create(_new_account(clock))
    sessions = SqlAlchemySessionStore(session_factory, ttl=timedelta(hours=24), clock=clock)

    session_id = sessions.create(account.as_ref())

    assert sessions.get(session_id) == AccountRef(
        id=account.id, username="alice", email="alice@example.com"
    )
    sessions.destroy(session_id)
    assert sessions.get(session_id) is None


def test_session_store_expiry(session_factory, credentials, clock) -> None:
    account = credentials.create(_new_account(clock))
    sessions = SqlAlchemySessionStore(session_factory, ttl=timedelta(hours=24), clock=clock)
    expired = sessions.create(account.as_ref())

    clock.advance(hours=24)
    fresh = sessions.create(account.as_ref())

    assert sessions.get(expired) is None
    assert sessions.get(fresh) is not None


def test_session_create_purges_expired_sessions(session_factory, credentials, clock) -> None:
    account = credentials.create(_new_account(clock))
    sessions = SqlAlchemySessionStore(session_factory, ttl=timedelta(hours=24), clock=clock)
    sessions.create(account.as_ref())

    clock.advance(hours=24)
    fresh = sessions.create(account.as_ref())

    with session_factory() as session:
        rows = session.execute(select(LoginSession.session_id)).scalars().all()
    assert rows == [fresh]
