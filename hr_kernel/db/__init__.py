"""Database layer - engine, base classes and transactional scopes."""

from hr_kernel.db.base import CURRENCY_NUMERIC, Base, TrackedBase
from hr_kernel.db.engine import (
    create_tables,
    get_engine,
    get_session,
    get_session_factory,
    init_engine_from_url,
    read_only_scope,
    session_scope,
)

__all__ = [
    "init_engine_from_url",
    "get_engine",
    "get_session",
    "get_session_factory",
    "session_scope",
    "read_only_scope",
    "create_tables",
    "Base",
    "TrackedBase",
    "CURRENCY_NUMERIC",
]
