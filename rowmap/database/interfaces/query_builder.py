"""Abstract query builder interface for different SQL backends."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from rowmap.criteria import PredicateSpec
from rowmap.types import DatabaseParamType, Glue


class QueryBuilder(ABC):
    """Abstract query builder for different SQL backends."""

    @abstractmethod
    def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
        order_by: Sequence[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[str, DatabaseParamType]:
        """Build SELECT query.

        Args:
            table: Table name
            columns: Columns to select (None for all)
            where: Predicates restricting the rows
            glue: How predicates are joined
            order_by: ORDER BY fields
            limit: LIMIT value
            offset: OFFSET value

        Returns:
            Tuple of (query, parameters)
        """
        pass

    @abstractmethod
    def insert(self, table: str, data: dict[str, Any]) -> tuple[str, DatabaseParamType]:
        """Build INSERT query."""
        pass

    @abstractmethod
    def update(
        self,
        table: str,
        data: dict[str, Any],
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> tuple[str, DatabaseParamType]:
        """Build UPDATE query."""
        pass

    @abstractmethod
    def delete(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> tuple[str, DatabaseParamType]:
        """Build DELETE query."""
        pass

    @abstractmethod
    def count(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> tuple[str, DatabaseParamType]:
        """Build COUNT query; the count is returned in a ``count`` column."""
        pass
