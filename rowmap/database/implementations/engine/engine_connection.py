"""Database connection backed by a SQLAlchemy engine."""

import threading
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from rowmap.database.interfaces.connection import DatabaseConnection, ExecutionResult
from rowmap.log import get_logger
from rowmap.types import DatabaseParamType

logger = get_logger(__name__)


class EngineConnection(DatabaseConnection):
    """Run statements on one connection checked out from an engine.

    Statements and their commit or rollback are serialized per instance.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._connection: Connection | None = None
        self._lock = threading.RLock()

    def connect(self) -> None:
        with self._lock:
            if self._connection is not None:
                return

            try:
                self._connection = self.engine.connect()
                logger.info(f"Connected to {self.engine.url}")
            except SQLAlchemyError as e:
                logger.error(f"Failed to connect to {self.engine.url}: {e}")
                raise

    def disconnect(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None
                logger.info(f"Disconnected from {self.engine.url}")

    def execute(self, query: str, params: DatabaseParamType = None) -> ExecutionResult:
        logger.debug(f"Executing: {query}")
        is_insert = query.lstrip().upper().startswith("INSERT")

        with self._lock:
            connection = self._require_connection()
            try:
                result = connection.execute(text(query), params or {})
                row_count = result.rowcount
                last_row_id = result.lastrowid if is_insert else None
                connection.commit()
            except SQLAlchemyError as e:
                logger.error(f"Query execution failed: {e}")
                connection.rollback()
                raise

        return ExecutionResult(row_count, last_row_id)

    def fetch_one(
        self, query: str, params: DatabaseParamType = None
    ) -> dict[str, Any] | None:
        rows = self.fetch_all(query, params)
        return rows[0] if rows else None

    def fetch_all(
        self, query: str, params: DatabaseParamType = None
    ) -> list[dict[str, Any]]:
        logger.debug(f"Fetching: {query}")

        with self._lock:
            connection = self._require_connection()
            try:
                result = connection.execute(text(query), params or {})
                rows = [dict(row._mapping) for row in result]
                # Reads open an implicit transaction; end it so writers are not blocked.
                connection.rollback()
                return rows
            except SQLAlchemyError as e:
                logger.error(f"Fetch failed: {e}")
                connection.rollback()
                raise

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def _require_connection(self) -> Connection:
        if self._connection is None:
            raise RuntimeError("Database not connected")
        return self._connection
