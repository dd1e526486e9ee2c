"""
Centralized database layer for DPF CMS.

Structure:
- entities/: SQLModel table definitions, one module per table
- repositories/: Data access layer per entity
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session factory, create_all)
"""

from .base import Base, to_naive_utc, utc_now
from .session import (
    async_session_maker,
    engine,
    get_session,
    get_session_factory,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "get_session_factory",
    "init_db",
    "to_naive_utc",
    "utc_now",
]
