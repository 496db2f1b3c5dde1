"""Port for credential hashing and verification."""

from __future__ import annotations

from typing import Protocol


class PasswordHasherPort(Protocol):
    """Credential hashing/verification contract."""

    def hash_password(self, password: str) -> str:
        """Hash plaintext credential for storage."""

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        """Verify plaintext credential against stored hash."""
