"""SQLite database manager implementation."""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rowmap.criteria import PredicateSpec
from rowmap.database.interfaces.connection import DatabaseConnection, ExecutionResult
from rowmap.database.interfaces.manager import DatabaseManager
from rowmap.exceptions import NotMapped
from rowmap.log import get_logger
from rowmap.schema.descriptors import MappedTypeInfo
from rowmap.types import Glue

from .query_builder import SQLiteQueryBuilder
from .schema_builder import SQLiteSchemaBuilder
from .sqlite_connection import MEMORY, SQLiteConnection

logger = get_logger(__name__)


class SQLiteManager(DatabaseManager):
    """Database manager speaking the SQLite dialect.

    The connection defaults to a stdlib ``sqlite3`` one; any
    :class:`DatabaseConnection` accepting named parameters (for instance
    :class:`rowmap.database.implementations.engine.EngineConnection` on a
    SQLite engine) can be supplied instead.
    """

    def __init__(
        self,
        db_path: str | Path = MEMORY,
        connection: DatabaseConnection | None = None,
    ) -> None:
        """Initialize SQLite manager.

        Args:
            db_path: Path to SQLite database file, ignored with ``connection``
            connection: Connection to use instead of a new ``sqlite3`` one
        """
        self._connection = connection or SQLiteConnection(db_path)
        self._query_builder = SQLiteQueryBuilder()
        self._schema_builder = SQLiteSchemaBuilder()

    def connect(self) -> None:
        self._connection.connect()

    def disconnect(self) -> None:
        self._connection.disconnect()

    @property
    def connection(self) -> DatabaseConnection:
        """Get database connection."""
        return self._connection

    @property
    def is_connected(self) -> bool:
        return self._connection.is_connected

    def select(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
        order_by: Sequence[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        query, params = self._query_builder.select(
            table,
            where=where,
            glue=glue,
            order_by=order_by,
            limit=limit,
            offset=offset,
        )
        return self._connection.fetch_all(query, params)

    def insert(self, table: str, data: dict[str, Any]) -> ExecutionResult:
        query, params = self._query_builder.insert(table, data)
        return self._connection.execute(query, params)

    def update(
        self,
        table: str,
        data: dict[str, Any],
        where: Sequence[PredicateSpec],
        glue: Glue = Glue.AND,
    ) -> int:
        query, params = self._query_builder.update(table, data, where, glue)
        return self._connection.execute(query, params).row_count

    def delete(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> int:
        query, params = self._query_builder.delete(table, where, glue)
        return self._connection.execute(query, params).row_count

    def count(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> int:
        query, params = self._query_builder.count(table, where, glue)
        row = self._connection.fetch_one(query, params)
        return int(row["count"]) if row else 0

    def create_table(self, info: MappedTypeInfo) -> None:
        """Create the table and indexes described by merged metadata."""
        table = info.table
        if table is None:
            raise NotMapped("Cannot create a table without a table descriptor")

        self._connection.execute(self._schema_builder.create_table_sql(info))
        for index in info.indexes:
            self._connection.execute(
                self._schema_builder.create_index_sql(table.table_name, index)
            )
        logger.info(f"> Created table {table.table_name}")

    def drop_table(self, table: str) -> None:
        self._connection.execute(self._schema_builder.drop_table_sql(table))
        logger.info(f"> Dropped table {table}")
