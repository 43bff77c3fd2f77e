# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


@dataclass(slots=True, frozen=True)
class Account:

    id: int
    username: str
    email: str
    phone: str
    gender: Gender
    password_hash: str
    created_at: datetime

    def public_view(self) -> dict[str, str]:
        return {"username": self.username, "email": self.email}

    def as_ref(self) -> AccountRef:
        return AccountRef(id=self.id, username=self.username, email=self.email)


@dataclass(slots=True, frozen=True)
class NewAccount:
    """Account fields before storage assigns an id."""

    username: str
    email: str
    phone: str
    gender: Gender
    password_hash: str
    created_at: datetime


@dataclass(slots=True, frozen=True)
class AccountRef:
    """Snapshot of an account taken at login; not refreshed afterwards."""

    id: int
    username: str
    email: str

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "username": self.username, "email": self.email}


@dataclass(slots=True, frozen=True)
class ResetToken:
    """Single-use reset capability; the store decides expiry at query time."""

    token: str
    account_id: int
    created_at: datetime


@dataclass(slots=True, frozen=True)
class ResetNotification:
    to: str
    subject: str
    body: str
    link: str
