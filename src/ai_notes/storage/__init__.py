"""Storage layer modules for AI Notes."""

from ai_notes.storage.database import (
    DatabaseManager,
    close_db,
    get_db,
    get_engine,
    get_session_factory,
    init_db,
)

__all__ = [
    "DatabaseManager",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_db",
    "close_db",
]
