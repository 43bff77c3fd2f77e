from __future__ import annotations

import pytest

from authportal.application.services.password_hashing import WerkzeugPasswordHasher
from authportal.domain.accounts.exceptions import PasswordHashIntegrityError

METHOD = "pbkdf2:sha256:1000"


def test_hash_is_salted_and_verifiable() -> None:
    hasher = WerkzeugPasswordHasher(method=METHOD)

    first = hasher.hash("Secret123!")
    second = hasher.hash("Secret123!")

    assert first != second
    assert first.startswith("pbkdf2:sha256:1000$")
    assert hasher.verify("Secret123!", first)
    assert not hasher.verify("Secret123?", first)


def test_malformed_hash_raises_integrity_error() -> None:
    hasher = WerkzeugPasswordHasher(method=METHOD)

    with pytest.raises(PasswordHashIntegrityError):
        hasher.verify("Secret123!", "not-a-hash")


def test_unknown_method_raises_integrity_error() -> None:
    hasher = WerkzeugPasswordHasher(method=METHOD)

    with pytest.raises(PasswordHashIntegrityError):
        hasher.verify("Secret123!", "rot13$salt$digest")


def test_burn_accepts_any_password() -> None:
    hasher = WerkzeugPasswordHasher(method=METHOD)

    assert hasher.burn("whatever") is None
