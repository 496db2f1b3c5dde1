"""User entity carrying identity, contact and credential data."""

from __future__ import annotations

from password_reset.domain.credentials import normalize_user_email, normalize_user_telephone
from password_reset.domain.password import Password


class User:
    """User identified by an immutable id.

    Property setters accept any value without validation; callers that need
    enforced contact invariants go through ``update_contact``.
    """

    def __init__(
        self,
        user_id: int,
        email: str,
        telephone: str,
        password: Password | None,
    ) -> None:
        self._id = user_id
        self._email = email
        self._telephone = telephone
        self._password = password

    @property
    def id(self) -> int:
        return self._id

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, email: str) -> None:
        self._email = email

    @property
    def telephone(self) -> str:
        return self._telephone

    @telephone.setter
    def telephone(self, telephone: str) -> None:
        self._telephone = telephone

    @property
    def password(self) -> Password | None:
        return self._password

    @password.setter
    def password(self, password: Password | None) -> None:
        self._password = password

    def update_contact(self, *, email: str | None = None, telephone: str | None = None) -> None:
        """Validate and apply contact changes; nothing changes if any value is invalid."""

        normalized_email = self._email if email is None else normalize_user_email(email=email)
        normalized_telephone = (
            self._telephone
            if telephone is None
            else normalize_user_telephone(telephone=telephone)
        )
        self._email = normalized_email
        self._telephone = normalized_telephone

    def change_password(self, password: Password) -> None:
        """Replace the credential, rejecting a missing value."""

        if password is None:
            raise ValueError("password cannot be None")
        self._password = password

    def __repr__(self) -> str:
        return f"User(email={self._email!r}, telephone={self._telephone!r})"

    __str__ = __repr__
