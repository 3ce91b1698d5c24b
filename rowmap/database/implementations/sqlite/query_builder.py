"""SQLite-specific query builder implementation."""

from collections.abc import Sequence
from typing import Any

from rowmap.criteria import PredicateSpec
from rowmap.database.interfaces.query_builder import QueryBuilder
from rowmap.database.utils import (
    build_limit_clause,
    build_order_by_clause,
    build_where_clause,
)
from rowmap.types import DatabaseParamType, Glue


class SQLiteQueryBuilder(QueryBuilder):
    """SQLite-specific query builder using named parameters."""

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
        cols = "*" if columns is None else ", ".join(columns)
        query = f"SELECT {cols} FROM {table}"
        params: dict[str, Any] = {}

        if where:
            where_clause, params = build_where_clause(where, glue)
            query += f" {where_clause}"

        if order_by:
            query += f" {build_order_by_clause(order_by)}"

        if limit is not None:
            query += f" {build_limit_clause(limit, offset)}"
        elif offset is not None:
            # SQLite only accepts OFFSET after a LIMIT.
            query += f" LIMIT -1 OFFSET {int(offset)}"

        return query, params

    def insert(self, table: str, data: dict[str, Any]) -> tuple[str, DatabaseParamType]:
        if not data:
            # Every column defaulted, e.g. a lone auto-increment key.
            return f"INSERT INTO {table} DEFAULT VALUES", {}

        columns = list(data.keys())
        placeholders = [f":{col}" for col in columns]

        query = (
            f"INSERT INTO {table} ({', '.join(columns)}) "
            f"VALUES ({', '.join(placeholders)})"
        )

        return query, dict(data)

    def update(
        self,
        table: str,
        data: dict[str, Any],
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> tuple[str, DatabaseParamType]:
        if not data:
            raise ValueError("Cannot update with empty data")

        set_clause = ", ".join([f"{col} = :set_{col}" for col in data.keys()])
        query = f"UPDATE {table} SET {set_clause}"
        params = {f"set_{col}": value for col, value in data.items()}

        if where:
            where_clause, where_params = build_where_clause(where, glue)
            query += f" {where_clause}"
            params.update(where_params)

        return query, params

    def delete(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> tuple[str, DatabaseParamType]:
        query = f"DELETE FROM {table}"
        params: dict[str, Any] = {}

        if where:
            where_clause, params = build_where_clause(where, glue)
            query += f" {where_clause}"

        return query, params

    def count(
        self,
        table: str,
        where: Sequence[PredicateSpec] = (),
        glue: Glue = Glue.AND,
    ) -> tuple[str, DatabaseParamType]:
        query = f"SELECT COUNT(*) AS count FROM {table}"
        params: dict[str, Any] = {}

        if where:
            where_clause, params = build_where_clause(where, glue)
            query += f" {where_clause}"

        return query, params
