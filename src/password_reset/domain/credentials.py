"""Shared normalization helpers for user contact and credential inputs."""

from __future__ import annotations

import re

_TELEPHONE_ALLOWED = re.compile(r"^[0-9+()\- ]+$")
_MIN_TELEPHONE_DIGITS = 7


def normalize_user_email(*, email: str) -> str:
    """Normalize one user email and reject blank or malformed values."""

    normalized = email.strip().lower()
    if not normalized:
        raise ValueError("email cannot be blank")

    local_part, separator, domain = normalized.partition("@")
    if not separator or not local_part or "@" in domain:
        raise ValueError(f"email must contain exactly one '@': {normalized!r}")
    if "." not in domain or domain.startswith(".") or domain.endswith("."):
        raise ValueError(f"email domain is not valid: {domain!r}")
    return normalized


def normalize_user_telephone(*, telephone: str) -> str:
    """Normalize one telephone number and reject blank or malformed values."""

    normalized = telephone.strip()
    if not normalized:
        raise ValueError("telephone cannot be blank")
    if _TELEPHONE_ALLOWED.match(normalized) is None:
        raise ValueError(f"telephone contains invalid characters: {normalized!r}")

    digit_count = sum(1 for char in normalized if char.isdigit())
    if digit_count < _MIN_TELEPHONE_DIGITS:
        raise ValueError(f"telephone must have at least {_MIN_TELEPHONE_DIGITS} digits")
    return normalized
