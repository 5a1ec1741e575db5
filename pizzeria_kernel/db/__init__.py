"""Database layer - engine, session scope, base classes."""

from pizzeria_kernel.db.base import UUID, Base, TimestampedBase, UUIDString
from pizzeria_kernel.db.engine import (
    create_engine_from_url,
    create_tables,
    drop_tables,
    is_retryable_conflict,
    make_session_factory,
    session_scope,
)

__all__ = [
    "create_engine_from_url",
    "make_session_factory",
    "session_scope",
    "create_tables",
    "drop_tables",
    "is_retryable_conflict",
    "Base",
    "TimestampedBase",
    "UUIDString",
    "UUID",
]
