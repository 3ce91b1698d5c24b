"""Database manager interface.

A manager is the storage collaborator consumed by
:class:`rowmap.database.repository.crud.CrudHelper`: it receives table
names, column data and predicate specifications, and owns the SQL text and
the connection.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from types import TracebackType
from typing import Any

from rowmap.criteria import PredicateSpec
from rowmap.database.interfaces.connection import ExecutionResult
from rowmap.schema.descriptors import MappedTypeInfo
from rowmap.types import Glue


class DatabaseManager(ABC):
    """Abstract database manager interface."""

    @abstractmethod
    def connect(self) -> None:
        """Establish database connection."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close database connection."""
        pass

    @abstractmethod
    def select(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
        order_by: Sequence[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        """Read the rows of ``table`` matching ``where``.

        Args:
            table: Table name
            where: Predicates restricting the rows
            glue: How predicates are joined
            order_by: ORDER BY fields
            limit: Maximum number of rows
            offset: Number of rows to skip

        Returns:
            Rows as dictionaries
        """
        pass

    @abstractmethod
    def insert(self, table: str, data: dict[str, Any]) -> ExecutionResult:
        """Insert one row.

        Returns:
            Row count and the id generated for the row, if any
        """
        pass

    @abstractmethod
    def update(
        self,
        table: str,
        data: dict[str, Any],
        where: Sequence[PredicateSpec],
        glue: Glue = Glue.AND,
    ) -> int:
        """Update matching rows and return how many were affected."""
        pass

    @abstractmethod
    def delete(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> int:
        """Delete matching rows and return how many were affected."""
        pass

    @abstractmethod
    def count(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> int:
        """Count matching rows."""
        pass

    @abstractmethod
    def create_table(self, info: MappedTypeInfo) -> None:
        """Create the table and indexes described by merged metadata."""
        pass

    @abstractmethod
    def drop_table(self, table: str) -> None:
        """Drop a table if it exists."""
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if database is connected."""
        pass

    def __enter__(self) -> "DatabaseManager":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disconnect()
