"""Immutable descriptions of mapped tables, columns, indexes and foreign keys."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from rowmap.exceptions import SchemaDefinitionError
from rowmap.types import ReferentialAction


def _names(values: Sequence[str] | str, what: str) -> tuple[str, ...]:
    if isinstance(values, str):
        values = (values,)
    names = tuple(values)
    for name in names:
        if not isinstance(name, str) or not name:
            raise SchemaDefinitionError(f"{what} must be non-empty strings: {names!r}")
    return names


@dataclass(frozen=True)
class TableDescriptor:
    """Database table declared by a mapped type."""

    table_name: str
    primary_keys: tuple[str, ...] = ()
    auto_column_name: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.table_name, str) or not self.table_name:
            raise SchemaDefinitionError("Table name must be a non-empty string")

        keys = _names(self.primary_keys, "Primary keys")
        if len(set(keys)) != len(keys):
            raise SchemaDefinitionError(
                f"Duplicate primary key in table {self.table_name}: {keys!r}"
            )
        object.__setattr__(self, "primary_keys", keys)

        if self.auto_column_name is not None and not self.auto_column_name:
            raise SchemaDefinitionError("Auto column name must not be empty")

    def merged_with(self, child: "TableDescriptor | None") -> "TableDescriptor":
        """Combine this (ancestor) table with a child's own declaration.

        The child's table name and auto column win when present. Primary
        keys are the ancestor's followed by the child's; a key the child
        repeats is kept once.

        Args:
            child: Table declared by the descendant type, if any

        Returns:
            Merged table descriptor
        """
        if child is None:
            return self

        keys = self.primary_keys + tuple(
            key for key in child.primary_keys if key not in self.primary_keys
        )
        return TableDescriptor(
            table_name=child.table_name or self.table_name,
            primary_keys=keys,
            auto_column_name=child.auto_column_name or self.auto_column_name,
        )


@dataclass(frozen=True)
class ColumnDescriptor:
    """Database column definition."""

    name: str
    sql_type: str = "TEXT"
    nullable: bool = True
    default: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise SchemaDefinitionError("Column name must be a non-empty string")
        if not self.sql_type:
            raise SchemaDefinitionError(f"Column {self.name} has no SQL type")


@dataclass(frozen=True)
class IndexDescriptor:
    """Named set of columns, optionally unique."""

    columns: tuple[str, ...]
    unique: bool = False
    name: str | None = None

    def __post_init__(self) -> None:
        columns = _names(self.columns, "Index columns")
        if not columns:
            raise SchemaDefinitionError("An index needs at least one column")
        object.__setattr__(self, "columns", columns)

        if self.name is None:
            object.__setattr__(self, "name", "index_" + "_".join(columns))
        elif not self.name:
            raise SchemaDefinitionError("Index name must not be empty")


@dataclass(frozen=True)
class ForeignKeyDescriptor:
    """Reference from local columns to columns of another table."""

    columns: tuple[str, ...]
    referenced_table: str
    referenced_columns: tuple[str, ...]
    on_delete: ReferentialAction = ReferentialAction.NO_ACTION
    on_update: ReferentialAction = ReferentialAction.NO_ACTION
    name: str | None = None

    def __post_init__(self) -> None:
        columns = _names(self.columns, "Foreign key columns")
        referenced = _names(self.referenced_columns, "Referenced columns")
        if not columns:
            raise SchemaDefinitionError("A foreign key needs at least one column")
        if len(columns) != len(referenced):
            raise SchemaDefinitionError(
                f"Foreign key {columns!r} -> {self.referenced_table}{referenced!r}: "
                "column counts differ"
            )
        if not isinstance(self.referenced_table, str) or not self.referenced_table:
            raise SchemaDefinitionError("Referenced table must be a non-empty string")

        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "referenced_columns", referenced)
        object.__setattr__(self, "on_delete", ReferentialAction(self.on_delete))
        object.__setattr__(self, "on_update", ReferentialAction(self.on_update))

        if self.name is None:
            object.__setattr__(
                self,
                "name",
                f"fk_{self.referenced_table}_" + "_".join(columns),
            )


@dataclass(frozen=True)
class MappedTypeInfo:
    """Merged metadata of one type, as stored in the schema cache.

    ``columns``, ``indexes`` and ``foreign_keys`` keep every declaration in
    merge order, including repeated names.
    """

    table: TableDescriptor | None = None
    columns: tuple[ColumnDescriptor, ...] = field(default_factory=tuple)
    indexes: tuple[IndexDescriptor, ...] = field(default_factory=tuple)
    foreign_keys: tuple[ForeignKeyDescriptor, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "indexes", tuple(self.indexes))
        object.__setattr__(self, "foreign_keys", tuple(self.foreign_keys))

    @property
    def is_mapped(self) -> bool:
        """True when a table with at least one primary key is declared."""
        return self.table is not None and bool(self.table.primary_keys)

    @property
    def table_name(self) -> str | None:
        return self.table.table_name if self.table else None

    @property
    def primary_keys(self) -> tuple[str, ...]:
        return self.table.primary_keys if self.table else ()

    @property
    def auto_column_name(self) -> str | None:
        return self.table.auto_column_name if self.table else None

    @property
    def column_names(self) -> tuple[str, ...]:
        """Distinct column names, first occurrence order."""
        return tuple(dict.fromkeys(column.name for column in self.columns))

    def column(self, name: str) -> ColumnDescriptor | None:
        """Look up a column by name; the last declaration wins."""
        found = None
        for column in self.columns:
            if column.name == name:
                found = column
        return found

    def merged_with(self, own: "MappedTypeInfo") -> "MappedTypeInfo":
        """Fold a descendant's own metadata on top of this accumulated one."""
        if self.table is None:
            table = own.table
        else:
            table = self.table.merged_with(own.table)

        return MappedTypeInfo(
            table=table,
            columns=self.columns + own.columns,
            indexes=self.indexes + own.indexes,
            foreign_keys=self.foreign_keys + own.foreign_keys,
        )
