# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from authportal.domain.accounts.entities import Account as DomainAccount
from authportal.domain.accounts.entities import Gender, NewAccount
from authportal.domain.accounts.exceptions import AccountIntegrityError, DuplicateKeyError
from authportal.domain.accounts.repositories import CredentialStore
from authportal.infrastructure.db import as_utc
from authportal.infrastructure.db.models import Account
from authportal.infrastructure.unit_of_work import SessionScopedRepository
from authportal.shared.errors.base import InfrastructureError
from authportal.shared.logging import logger

UNIQUE_FIELDS = ("username", "email", "phone")


def _to_domain(row: Account) -> DomainAccount:
    return DomainAccount(
        id=row.id,
        username=row.username,
        email=row.email,
        phone=row.phone,
        gender=Gender(row.gender),
        password_hash=row.password_hash,
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyCredentialStore(SessionScopedRepository, CredentialStore):
    def _find_one(self, *criteria) -> DomainAccount | None:
        with self._scope() as session:
            row = session.execute(select(Account).where(*criteria)).scalar_one_or_none()
            return _to_domain(row) if row else None

    def find_by_id(self, account_id: int) -> DomainAccount | None:
        return self._find_one(Account.id == account_id)

    def find_by_username(self, username: str) -> DomainAccount | None:
        return self._find_one(Account.username == username)

    def find_by_email(self, email: str) -> DomainAccount | None:
        return self._find_one(Account.email == email.strip().lower())

    def find_by_phone(self, phone: str) -> DomainAccount | None:
        return self._find_one(Account.phone == phone)

    def create(self, account: NewAccount) -> DomainAccount:
        try:
            with self._scope() as session:
                row = Account(
                    username=account.username,
                    email=account.email.lower(),
                    phone=account.phone,
                    gender=account.gender.value,
                    password_hash=account.password_hash,
                    created_at=account.created_at,
                )
                session.add(row)
                session.flush()
                created = _to_domain(row)
        except IntegrityError as exc:
            raise self._duplicate_from(exc, account) from exc
        return created

    def update_password_hash(self, account_id: int, password_hash: str) -> None:
        with self._scope() as session:
            result = session.execute(
                update(Account).where(Account.id == account_id).values(password_hash=password_hash)
            )
            if result.rowcount == 0:
                raise AccountIntegrityError(account_id)

    def _duplicate_from(self, exc: IntegrityError, account: NewAccount) -> Exception:
        detail = str(exc.orig).lower()
        for field in UNIQUE_FIELDS:
            if f"accounts.{field}" in detail or f"uq_accounts_{field}" in detail:
                return DuplicateKeyError(field, getattr(account, field))

        # Some drivers do not name the column; find the collision by lookup.
        lookups = {
            "username": self.find_by_username,
            "email": self.find_by_email,
            "phone": self.find_by_phone,
        }
        for field, lookup in lookups.items():
            if lookup(getattr(account, field)) is not None:
                return DuplicateKeyError(field, getattr(account, field))

        logger.error(f"credential_store: integrity error on create: {type(exc.orig).__name__}")
        return InfrastructureError("account_create_failed")


__all__ = ["SqlAlchemyCredentialStore"]
