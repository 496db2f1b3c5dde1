"""Password value object holding only the hashed credential."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from password_reset.application.ports.password_hasher_port import PasswordHasherPort


def reverse_characters(raw_password: str) -> str:
    """Return the character-reversed form used by legacy credential records.

    This transform is deterministic and total, but it is not a hash and offers
    no protection. It is kept only so legacy values can be recognized; new
    credentials are always hashed through a ``PasswordHasherPort``.
    """

    return raw_password[::-1]


class Password:
    """Immutable hashed credential owned by exactly one user."""

    __slots__ = ("_password_hash", "_hasher")

    def __init__(self, raw_password: str, *, hasher: PasswordHasherPort) -> None:
        self._hasher = hasher
        self._password_hash = hasher.hash_password(raw_password)

    @classmethod
    def from_hash(cls, password_hash: str, *, hasher: PasswordHasherPort) -> Password:
        """Rebuild a password value from a previously stored hash."""

        instance = cls.__new__(cls)
        instance._hasher = hasher
        instance._password_hash = password_hash
        return instance

    @property
    def password_hash(self) -> str:
        return self._password_hash

    def verify(self, raw_password: str) -> bool:
        """Return whether the candidate credential matches the stored hash."""

        return self._hasher.verify_password(
            password=raw_password,
            password_hash=self._password_hash,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Password):
            return NotImplemented
        return self._password_hash == other._password_hash

    def __hash__(self) -> int:
        return hash(self._password_hash)

    def __repr__(self) -> str:
        return "Password(<redacted>)"
