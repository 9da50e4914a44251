"""Server profile store — CRUD over the ``servers`` table.

Write operations apply the field rules from ``core.field_limits`` before
touching the database. Reads return rows as stored.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from swinedroid.constants import (
    DATABASE_TABLE,
    DATABASE_VERSION,
    DB_FILENAME,
    INVALID_ROW_ID,
    KEY_HOST,
    KEY_PASSWORD,
    KEY_PORT,
    KEY_ROWID,
    KEY_USERNAME,
    MAX_ROW_ID,
    MIN_ROW_ID,
    SERVER_COLUMNS,
)
from swinedroid.core.field_limits import sanitize_server_fields
from swinedroid.database.db_manager import DatabaseManager
from swinedroid.models.server import ServerProfile

logger = logging.getLogger(__name__)

_CREATE_SQL = f"""
CREATE TABLE {DATABASE_TABLE} (
    {KEY_ROWID} INTEGER PRIMARY KEY AUTOINCREMENT,
    {KEY_HOST} VARCHAR(128) NOT NULL,
    {KEY_PORT} INT NOT NULL,
    {KEY_USERNAME} VARCHAR(128) NOT NULL,
    {KEY_PASSWORD} VARCHAR(128) NOT NULL
)
"""

_SELECT_COLUMNS = ", ".join(SERVER_COLUMNS)

# Writable columns, in the order sanitize_server_fields returns them
_DATA_COLUMNS = (KEY_HOST, KEY_PORT, KEY_USERNAME, KEY_PASSWORD)
_WRITE_COLUMNS = ", ".join(_DATA_COLUMNS)
_WRITE_PLACEHOLDERS = ", ".join("?" for _ in _DATA_COLUMNS)
_UPDATE_ASSIGNMENTS = ", ".join(f"{c} = ?" for c in _DATA_COLUMNS)


def _in_id_range(row_id: int) -> bool:
    return MIN_ROW_ID <= row_id <= MAX_ROW_ID


def _create_schema(conn: sqlite3.Connection) -> None:
    conn.execute(_CREATE_SQL)


def _upgrade_schema(conn: sqlite3.Connection, old_version: int, new_version: int) -> None:
    logger.warning(
        "Upgrading database from version %d to %d, which will destroy all old data",
        old_version, new_version,
    )
    conn.execute(f"DROP TABLE IF EXISTS {DATABASE_TABLE}")
    _create_schema(conn)


class ProfileStore:
    """Local table of server connection profiles.

    Args:
        data_dir: Directory supplied by the host application; the
            database file ``DB_FILENAME`` is kept there.
        version: Declared schema version. Raising it drops every row.
    """

    def __init__(self, data_dir: Path | str, version: int = DATABASE_VERSION):
        self._db = DatabaseManager(
            Path(data_dir) / DB_FILENAME,
            version,
            on_create=_create_schema,
            on_upgrade=_upgrade_schema,
        )

    @property
    def db_path(self) -> Path:
        return self._db.db_path

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> ProfileStore:
        """Open the database, creating or upgrading the schema as needed.

        Returns:
            self, so the call can be chained.

        Raises:
            sqlite3.Error: if the database could be neither opened nor
                created.
        """
        self._db.connect()
        return self

    def close(self) -> None:
        self._db.close()

    def _conn(self) -> sqlite3.Connection:
        if not self._db.is_open:
            raise RuntimeError("ProfileStore is not open")
        return self._db.connect()

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, host: str, port: int, username: str, password: str) -> int:
        """Insert a new server profile.

        Returns:
            The new row id, or ``INVALID_ROW_ID`` if the insert failed.
        """
        conn = self._conn()
        values = sanitize_server_fields(host, port, username, password)
        try:
            cursor = conn.execute(
                f"INSERT INTO {DATABASE_TABLE} ({_WRITE_COLUMNS}) "
                f"VALUES ({_WRITE_PLACEHOLDERS})",
                values,
            )
            conn.commit()
        except (sqlite3.Error, UnicodeEncodeError):
            conn.rollback()
            logger.exception("Error inserting server %s:%d", values[0], values[1])
            return INVALID_ROW_ID
        return cursor.lastrowid

    def delete(self, row_id: int) -> bool:
        """Delete the profile with the given id. True if a row was removed."""
        conn = self._conn()
        if not _in_id_range(row_id):
            return False
        cursor = conn.execute(
            f"DELETE FROM {DATABASE_TABLE} WHERE {KEY_ROWID} = ?", (row_id,)
        )
        conn.commit()
        return cursor.rowcount > 0

    def fetch_all(self) -> sqlite3.Cursor:
        """Cursor over every profile, columns in ``SERVER_COLUMNS`` order."""
        conn = self._conn()
        return conn.execute(f"SELECT {_SELECT_COLUMNS} FROM {DATABASE_TABLE}")

    def fetch_one(self, row_id: int) -> sqlite3.Row | None:
        """Return the row matching *row_id*, or None if there is none."""
        conn = self._conn()
        if not _in_id_range(row_id):
            return None
        return conn.execute(
            f"SELECT {_SELECT_COLUMNS} FROM {DATABASE_TABLE} WHERE {KEY_ROWID} = ?",
            (row_id,),
        ).fetchone()

    def update(
        self, row_id: int, host: str, port: int, username: str, password: str,
    ) -> bool:
        """Overwrite the profile with the given id.

        Returns:
            True if a row changed. False for an unknown id, or when the
            write fails (logged, nothing is changed).
        """
        conn = self._conn()
        if not _in_id_range(row_id):
            return False
        values = sanitize_server_fields(host, port, username, password)
        try:
            cursor = conn.execute(
                f"UPDATE {DATABASE_TABLE} SET {_UPDATE_ASSIGNMENTS} "
                f"WHERE {KEY_ROWID} = ?",
                (*values, row_id),
            )
            conn.commit()
        except (sqlite3.Error, UnicodeEncodeError):
            conn.rollback()
            logger.exception("Error updating server %d", row_id)
            return False
        return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Typed views
    # ------------------------------------------------------------------

    def list_servers(self) -> list[ServerProfile]:
        """All profiles in storage order."""
        return [ServerProfile.from_row(r) for r in self.fetch_all()]

    def get_server(self, row_id: int) -> ServerProfile | None:
        row = self.fetch_one(row_id)
        return ServerProfile.from_row(row) if row is not None else None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
