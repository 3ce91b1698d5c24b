"""SQLite database connection implementation."""

import sqlite3
import threading
from pathlib import Path
from typing import Any

from rowmap.database.interfaces.connection import DatabaseConnection, ExecutionResult
from rowmap.log import get_logger
from rowmap.types import DatabaseParamType

logger = get_logger(__name__)

MEMORY = ":memory:"


class SQLiteConnection(DatabaseConnection):
    """SQLite database connection implementation.

    The underlying ``sqlite3`` connection is shared across threads, so every
    statement and its commit or rollback run under one lock per connection.
    """

    def __init__(self, db_path: str | Path = MEMORY, timeout: float = 60.0) -> None:
        """Initialize SQLite connection.

        Args:
            db_path: Path to SQLite database file, or ``":memory:"``
            timeout: Seconds to wait for a locked database
        """
        self.db_path = db_path if db_path == MEMORY else Path(db_path)
        self.timeout = timeout
        self._connection: sqlite3.Connection | None = None
        self._lock = threading.RLock()

    def connect(self) -> None:
        """Establish SQLite database connection."""
        with self._lock:
            if self._connection is None:
                self._open()

    def _open(self) -> None:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=self.timeout,
            )
            self._connection.row_factory = sqlite3.Row
            self._configure_connection()
            logger.info(f"Connected to SQLite: {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Failed to connect to SQLite database: {e}")
            raise

    def disconnect(self) -> None:
        """Close SQLite database connection."""
        with self._lock:
            if self._connection:
                self._connection.close()
                self._connection = None
                logger.info("Disconnected from SQLite")

    def execute(self, query: str, params: DatabaseParamType = None) -> ExecutionResult:
        logger.debug(f"Executing: {query}")

        with self._lock:
            connection = self._require_connection()
            try:
                cursor = connection.execute(query, params or ())
                connection.commit()
                return ExecutionResult(cursor.rowcount, cursor.lastrowid)
            except sqlite3.Error as e:
                logger.error(f"Query execution failed: {e}")
                connection.rollback()
                raise

    def fetch_one(
        self, query: str, params: DatabaseParamType = None
    ) -> dict[str, Any] | None:
        logger.debug(f"Fetching one: {query}")

        with self._lock:
            connection = self._require_connection()
            try:
                row = connection.execute(query, params or ()).fetchone()
                return dict(row) if row else None
            except sqlite3.Error as e:
                logger.error(f"Fetch one failed: {e}")
                raise

    def fetch_all(
        self, query: str, params: DatabaseParamType = None
    ) -> list[dict[str, Any]]:
        logger.debug(f"Fetching all: {query}")

        with self._lock:
            connection = self._require_connection()
            try:
                rows = connection.execute(query, params or ()).fetchall()
                return [dict(row) for row in rows]
            except sqlite3.Error as e:
                logger.error(f"Fetch all failed: {e}")
                raise

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connection is not None

    def _require_connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise RuntimeError("Database not connected")
        return self._connection

    def _configure_connection(self) -> None:
        """Enforce foreign keys and wait on locks in milliseconds."""
        connection = self._require_connection()
        connection.execute("PRAGMA foreign_keys = ON")
        connection.execute(f"PRAGMA busy_timeout = {int(self.timeout * 1000)}")
