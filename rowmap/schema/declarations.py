"""Declaration surface for mapped types.

Metadata is declared with class decorators next to the type::

    @table("user", primary_keys=["user_id"], auto_column="user_id")
    @column("user_id", "INTEGER", nullable=False)
    @column("username", "TEXT", nullable=False)
    @index(["username"], unique=True)
    class User(Row):
        user_id: int | None = None
        username: str

Stacked decorators keep the top-down reading order. A decorator only records
the *own* declarations of the class it decorates; inherited metadata is
merged by :class:`rowmap.schema.reader.AttributesReader`.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict

from rowmap.exceptions import SchemaDefinitionError
from rowmap.schema.descriptors import (
    ColumnDescriptor,
    ForeignKeyDescriptor,
    IndexDescriptor,
    TableDescriptor,
)
from rowmap.types import ReferentialAction

C = TypeVar("C", bound=type)

_DECLARATION_ATTR = "__rowmap_declaration__"


@dataclass(frozen=True)
class SchemaDeclaration:
    """Own metadata of a type plus its links in the type graph."""

    table: TableDescriptor | None = None
    columns: tuple[ColumnDescriptor, ...] = ()
    indexes: tuple[IndexDescriptor, ...] = ()
    foreign_keys: tuple[ForeignKeyDescriptor, ...] = ()
    fragments: tuple[type, ...] = field(default_factory=tuple)
    parent: type | None = None


@runtime_checkable
class DescribesSchema(Protocol):
    """Capability of a type able to describe its own table metadata."""

    @classmethod
    def describe_schema(cls) -> SchemaDeclaration: ...


def _own_declaration(cls: type) -> SchemaDeclaration:
    # Only the class namespace itself counts, never an inherited attribute.
    declaration = cls.__dict__.get(_DECLARATION_ATTR)
    if declaration is None:
        return SchemaDeclaration()
    return declaration


def _declare(cls: C, **changes: Any) -> C:
    current = _own_declaration(cls)
    values = {
        "table": current.table,
        "columns": current.columns,
        "indexes": current.indexes,
        "foreign_keys": current.foreign_keys,
    }
    values.update(changes)
    setattr(cls, _DECLARATION_ATTR, SchemaDeclaration(**values))
    return cls


def table(
    name: str,
    primary_keys: Sequence[str] | str = (),
    auto_column: str | None = None,
) -> Callable[[C], C]:
    """Declare the table a type maps to.

    Args:
        name: Table name
        primary_keys: Primary key column names
        auto_column: Column filled by the database on insert

    Returns:
        Class decorator
    """
    descriptor = TableDescriptor(name, tuple(_as_list(primary_keys)), auto_column)

    def decorator(cls: C) -> C:
        if _own_declaration(cls).table is not None:
            raise SchemaDefinitionError(
                f"{cls.__qualname__} declares more than one table"
            )
        return _declare(cls, table=descriptor)

    return decorator


def column(
    name: str,
    sql_type: str = "TEXT",
    nullable: bool = True,
    default: Any = None,
) -> Callable[[C], C]:
    """Declare a column of the type's table."""
    descriptor = ColumnDescriptor(name, sql_type, nullable, default)

    def decorator(cls: C) -> C:
        return _declare(
            cls, columns=(descriptor,) + _own_declaration(cls).columns
        )

    return decorator


def index(
    columns: Sequence[str] | str,
    unique: bool = False,
    name: str | None = None,
) -> Callable[[C], C]:
    """Declare an index over one or more columns."""
    descriptor = IndexDescriptor(tuple(_as_list(columns)), unique, name)

    def decorator(cls: C) -> C:
        return _declare(
            cls, indexes=(descriptor,) + _own_declaration(cls).indexes
        )

    return decorator


def foreign_key(
    columns: Sequence[str] | str,
    referenced_table: str,
    referenced_columns: Sequence[str] | str,
    on_delete: ReferentialAction | str = ReferentialAction.NO_ACTION,
    on_update: ReferentialAction | str = ReferentialAction.NO_ACTION,
    name: str | None = None,
) -> Callable[[C], C]:
    """Declare a foreign key from local columns to another table."""
    descriptor = ForeignKeyDescriptor(
        tuple(_as_list(columns)),
        referenced_table,
        tuple(_as_list(referenced_columns)),
        ReferentialAction(on_delete),
        ReferentialAction(on_update),
        name,
    )

    def decorator(cls: C) -> C:
        return _declare(
            cls, foreign_keys=(descriptor,) + _own_declaration(cls).foreign_keys
        )

    return decorator


def _as_list(values: Sequence[str] | str) -> list[str]:
    if isinstance(values, str):
        return [values]
    return list(values)


class Mapped(BaseModel):
    """Pydantic model describing its schema from decorator declarations."""

    model_config = ConfigDict(validate_assignment=True)

    __rowmap_abstract__: ClassVar[bool] = True

    @classmethod
    def describe_schema(cls) -> SchemaDeclaration:
        """Return the own declarations of this class and its graph links.

        The parent is the single direct base deriving from :class:`Row`,
        whatever fragments it composes itself. Fragments are the remaining
        direct bases deriving from :class:`Fragment`, in declaration order.
        The marker classes themselves are skipped.

        Raises:
            SchemaDefinitionError: If more than one mapped parent is found
        """
        own = _own_declaration(cls)
        fragments: list[type] = []
        parents: list[type] = []

        for base in cls.__bases__:
            if base.__dict__.get("__rowmap_abstract__", False):
                continue
            # A row composing fragments is still a parent, never a fragment.
            if issubclass(base, Row):
                parents.append(base)
            elif issubclass(base, Fragment):
                fragments.append(base)

        if len(parents) > 1:
            names = ", ".join(parent.__qualname__ for parent in parents)
            raise SchemaDefinitionError(
                f"{cls.__qualname__} has more than one mapped parent: {names}"
            )

        return SchemaDeclaration(
            table=own.table,
            columns=own.columns,
            indexes=own.indexes,
            foreign_keys=own.foreign_keys,
            fragments=tuple(fragments),
            parent=parents[0] if parents else None,
        )


class Row(Mapped):
    """Base class of persistable mapped types."""

    __rowmap_abstract__: ClassVar[bool] = True


class Fragment(Mapped):
    """Base class of reusable column blocks mixed into rows."""

    __rowmap_abstract__: ClassVar[bool] = True
