"""Port for issuing and redeeming password reset tokens."""

from __future__ import annotations

from typing import Protocol


class ResetTokenIssuerPort(Protocol):
    """Reset token issuance contract used by the reset orchestrator."""

    def issue(self, *, user_id: int) -> str:
        """Return a plaintext token authorizing one password change for user."""

    def has_outstanding(self, *, user_id: int) -> bool:
        """Return whether user already holds a usable token."""

    def redeem(self, *, user_id: int, token: str) -> bool:
        """Consume token for user; return False when it is not valid."""
