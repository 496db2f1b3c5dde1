from __future__ import annotations

import pytest

from password_reset.domain.password import Password
from password_reset.domain.user import User


class FakePasswordHasher:
    def hash_password(self, password: str) -> str:
        return f"hashed::{password}"

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{password}"


def _password(raw: str = "hunter2") -> Password:
    return Password(raw, hasher=FakePasswordHasher())


def _user() -> User:
    return User(1, "a@b.com", "555-1234", _password())


def test_constructor_values_are_exposed() -> None:
    password = _password()
    user = User(42, "a@b.com", "555-1234", password)

    assert user.id == 42
    assert user.email == "a@b.com"
    assert user.telephone == "555-1234"
    assert user.password is password


def test_id_is_unchanged_by_setters() -> None:
    user = _user()

    user.email = "c@d.com"
    user.telephone = "999"
    user.password = _password("other")
    user.update_contact(email="e@f.com", telephone="+55 71 99999-0000")

    assert user.id == 1


def test_id_cannot_be_reassigned() -> None:
    user = _user()

    with pytest.raises(AttributeError):
        user.id = 2  # type: ignore[misc]


@pytest.mark.parametrize("email", ["a@b.com", "", "not-an-email", "  spaced@x.org  "])
def test_email_setter_overrides_exactly_without_validation(email: str) -> None:
    user = User(1, email, "555-1234", _password())
    assert user.email == email

    user.email = "override"

    assert user.email == "override"


def test_setters_accept_empty_telephone_and_missing_password() -> None:
    user = _user()

    user.telephone = ""
    user.password = None

    assert user.telephone == ""
    assert user.password is None


def test_repr_renders_contact_fields_only() -> None:
    user = _user()

    rendered = str(user)

    assert "a@b.com" in rendered
    assert "555-1234" in rendered
    assert "hunter2" not in rendered
    assert "hashed::" not in rendered
    assert repr(user) == rendered


def test_update_contact_normalizes_values() -> None:
    user = _user()

    user.update_contact(email="  New@Example.ORG ", telephone=" (71) 3333-4444 ")

    assert user.email == "new@example.org"
    assert user.telephone == "(71) 3333-4444"


def test_update_contact_with_only_email_keeps_telephone() -> None:
    user = _user()

    user.update_contact(email="x@y.com")

    assert user.email == "x@y.com"
    assert user.telephone == "555-1234"


def test_update_contact_rejects_invalid_value_without_partial_mutation() -> None:
    user = _user()

    with pytest.raises(ValueError):
        user.update_contact(email="valid@example.org", telephone="call me")

    assert user.email == "a@b.com"
    assert user.telephone == "555-1234"


def test_change_password_rejects_none() -> None:
    user = _user()
    original = user.password

    with pytest.raises(ValueError):
        user.change_password(None)  # type: ignore[arg-type]

    assert user.password is original


def test_change_password_replaces_value() -> None:
    user = _user()
    replacement = _password("new-secret")

    user.change_password(replacement)

    assert user.password is replacement
