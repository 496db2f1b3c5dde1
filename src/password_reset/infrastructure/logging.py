"""Shared logging configuration helpers for the reset entrypoints."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: str) -> None:
    """Configure process logging with consistent format and runtime level."""

    normalized_level = level.strip().upper() if level.strip() else "INFO"
    resolved_level = getattr(logging, normalized_level, logging.INFO)

    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
    )


def mask_destination(destination: str) -> str:
    """Return a log-safe rendering of an email address or phone number."""

    local_part, separator, domain = destination.partition("@")
    if separator:
        visible = local_part[:1]
        return f"{visible}***@{domain}"
    if len(destination) <= 4:
        return "***"
    return f"***{destination[-4:]}"
