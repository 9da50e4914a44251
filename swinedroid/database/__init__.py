"""Database layer — SQLite connection, schema versioning, and the server profile store."""

from swinedroid.database.db_manager import DatabaseManager
from swinedroid.database.server_store import ProfileStore

__all__ = [
    "DatabaseManager",
    "ProfileStore",
]
