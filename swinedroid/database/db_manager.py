"""SQLite database manager — connection and schema version lifecycle.

The schema version lives in ``PRAGMA user_version``. On connect the stored
version is compared with the declared one:

  0 (no schema)       -> on_create hook
  older than declared -> on_upgrade hook
  newer than declared -> refused with sqlite3.DatabaseError

Create and upgrade run inside a single transaction together with the
version bump.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

CreateHook = Callable[[sqlite3.Connection], None]
UpgradeHook = Callable[[sqlite3.Connection, int, int], None]


class DatabaseManager:
    """Manages one SQLite connection and its schema version."""

    def __init__(
        self,
        db_path: Path | str,
        version: int,
        on_create: CreateHook,
        on_upgrade: UpgradeHook,
    ):
        if version < 1:
            raise ValueError(f"Version must be >= 1, was {version}")
        self._db_path = Path(db_path)
        self._version = version
        self._on_create = on_create
        self._on_upgrade = on_upgrade
        self._conn: sqlite3.Connection | None = None

    @property
    def db_path(self) -> Path:
        return self._db_path

    @property
    def version(self) -> int:
        """Declared schema version."""
        return self._version

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def connect(self) -> sqlite3.Connection:
        """Open (or return existing) database connection.

        Raises:
            sqlite3.Error: if the file can be neither opened nor created,
                or holds a newer schema than declared.
        """
        if self._conn is None:
            try:
                self._db_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise sqlite3.OperationalError(
                    f"unable to open database file {self._db_path}"
                ) from e
            conn = sqlite3.connect(str(self._db_path))
            try:
                conn.execute("PRAGMA journal_mode=WAL")
                conn.row_factory = sqlite3.Row
                self._check_version(conn)
            except Exception:
                conn.close()
                raise
            self._conn = conn
            logger.debug("Opened %s at schema version %d", self._db_path, self._version)
        return self._conn

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Closed %s", self._db_path)

    @property
    def schema_version(self) -> int:
        """Version currently stored in the database file."""
        conn = self.connect()
        return conn.execute("PRAGMA user_version").fetchone()[0]

    def get_tables(self) -> list[str]:
        """Return list of table names in the database."""
        conn = self.connect()
        cursor = conn.execute(
            "SELECT name FROM sqlite_master "
            "WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
        )
        return [row[0] for row in cursor.fetchall()]

    def _check_version(self, conn: sqlite3.Connection) -> None:
        current = conn.execute("PRAGMA user_version").fetchone()[0]
        if current == self._version:
            return
        if current > self._version:
            raise sqlite3.DatabaseError(
                f"Can't downgrade database from version {current} "
                f"to {self._version}"
            )

        conn.execute("BEGIN")
        try:
            if current == 0:
                logger.debug("Creating schema version %d in %s",
                             self._version, self._db_path)
                self._on_create(conn)
            else:
                self._on_upgrade(conn, current, self._version)
            # PRAGMA does not accept bound parameters
            conn.execute(f"PRAGMA user_version = {int(self._version)}")
        except BaseException:
            conn.rollback()
            raise
        conn.commit()

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
