"""Dialect-specific INSERT ... ON CONFLICT construction.

The idempotency boundaries (one attendance per day, one title unlock per
user, one ticket row per user) are unique constraints. Writers race on them
with ON CONFLICT so that the losing request sees "already present" instead
of an IntegrityError that would poison the surrounding transaction.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession


def insert_for(db: AsyncSession, model: Any) -> Any:  # noqa: ANN401
    """Return an INSERT construct supporting on_conflict_* for the session's dialect."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert(model)
    if dialect == "sqlite":
        return sqlite_insert(model)
    msg = f"ON CONFLICT inserts are not supported on dialect {dialect!r}"
    raise NotImplementedError(msg)
