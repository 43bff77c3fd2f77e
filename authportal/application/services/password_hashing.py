"""Password hashing strategies."""

from __future__ import annotations

import secrets

from werkzeug.security import check_password_hash, generate_password_hash

from authportal.domain.accounts.exceptions import PasswordHashIntegrityError
from authportal.domain.accounts.repositories import PasswordHasher


class WerkzeugPasswordHasher(PasswordHasher):
    """Salted adaptive hashing through werkzeug.

    ``method`` is a werkzeug method string such as ``scrypt:32768:8:1`` or
    ``pbkdf2:sha256:600000``; its parameters set the work factor.
    """

    def __init__(self, method: str = "scrypt:32768:8:1", salt_length: int = 16) -> None:
        self._method = method
        self._salt_length = salt_length
        self._dummy_hash = self.hash(secrets.token_urlsafe(16))

    def hash(self, password: str) -> str:
        return str(
            generate_password_hash(password, method=self._method, salt_length=self._salt_length)
        )

    def verify(self, password: str, hashed: str) -> bool:
        method, _, rest = hashed.partition("$")
        salt, _, digest = rest.partition("$")
        if not method or not salt or not digest:
            raise PasswordHashIntegrityError("malformed stored hash")
        try:
            return bool(check_password_hash(hashed, password))
        except ValueError as exc:
            raise PasswordHashIntegrityError(f"unsupported hash method {method.split(':')[0]}") from exc

    def burn(self, password: str) -> None:
        """Spend one verification so a missing account costs the same as a bad password."""
        check_password_hash(self._dummy_hash, password)
