"""SQLAlchemy session factory helpers."""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Session, sessionmaker


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a reusable session factory for an already-migrated database."""

    engine = sa.create_engine(database_url)
    return sessionmaker(engine, expire_on_commit=False)
