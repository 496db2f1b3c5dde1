"""SQLAlchemy table metadata for reset token persistence."""

from __future__ import annotations

import sqlalchemy as sa

metadata = sa.MetaData()

reset_tokens = sa.Table(
    "reset_tokens",
    metadata,
    sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
    sa.Column("user_id", sa.BigInteger(), nullable=False),
    sa.Column("token_hash", sa.String(64), nullable=False),
    sa.Column("issued_at", sa.DateTime(timezone=True), nullable=False),
    sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
    sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
    sa.UniqueConstraint("token_hash", name="uq_reset_tokens_token_hash"),
)
sa.Index("ix_reset_tokens_user_id", reset_tokens.c.user_id)
sa.Index("ix_reset_tokens_expires_at", reset_tokens.c.expires_at)
