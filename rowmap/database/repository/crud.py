"""Generic CRUD helper driven by merged type metadata."""

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from rowmap import config
from rowmap.criteria import Criteria, PredicateSpec
from rowmap.database.interfaces.manager import DatabaseManager
from rowmap.database.utils import row_to_model
from rowmap.exceptions import AmbiguousResult, NotMapped, RowmapError, StorageError
from rowmap.log import get_logger
from rowmap.schema.descriptors import MappedTypeInfo
from rowmap.schema.reader import AttributesReader, default_reader
from rowmap.types import Operator

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)
R = TypeVar("R")


class CrudHelper(Generic[T]):
    """Read, create, update and delete rows of one mapped type.

    Table and column names come from the reader's merged metadata of the
    type; rows are materialized with pydantic validation. Reads return rows
    in primary key order, so ``read_one_by`` always picks the same row among
    several matches unless ``unique`` asks for an ``AmbiguousResult``.

    Statements are serialized by the manager's connection, so helpers of
    different types can share one manager across threads.
    """

    def __init__(
        self,
        entity_type: type[T] | str,
        database: DatabaseManager,
        reader: AttributesReader | None = None,
        strict_read_one: bool | None = None,
    ) -> None:
        """Initialize CRUD helper.

        Args:
            entity_type: Mapped pydantic type, or an identity the reader resolves
            database: Storage collaborator
            reader: Metadata reader sharing the application's schema cache
            strict_read_one: Default for ``read_one_by(unique=...)``, taken
                from ``settings.strict_read_one`` when omitted
        """
        self.reader = reader if reader is not None else default_reader()
        cls = self.reader.find_type(entity_type)
        if not issubclass(cls, BaseModel):
            raise TypeError(f"{cls.__qualname__} is not a pydantic model")
        self.entity_type: type[T] = cls  # type: ignore[assignment]
        self.database = database
        self.strict_read_one = (
            config.settings.strict_read_one
            if strict_read_one is None
            else strict_read_one
        )

    @property
    def info(self) -> MappedTypeInfo:
        """Merged metadata of the entity type."""
        return self.reader.resolve(self.entity_type)

    def _mapped(self) -> MappedTypeInfo:
        info = self.info
        if info.table is None:
            raise NotMapped(f"{self.entity_type.__qualname__} has no table descriptor")
        if not info.table.primary_keys:
            raise NotMapped(
                f"{self.entity_type.__qualname__} (table {info.table.table_name}) "
                "declares no primary key"
            )
        return info

    def _translate(
        self, info: MappedTypeInfo, criteria: Criteria
    ) -> tuple[PredicateSpec, ...]:
        criteria.validate_against(info.column_names)
        return criteria.to_predicate_specification()

    def _call(
        self, operation: str, func: Callable[..., R], *args: Any, **kwargs: Any
    ) -> R:
        try:
            return func(*args, **kwargs)
        except RowmapError:
            raise
        except Exception as exc:
            logger.error(
                f"{operation} on {self.entity_type.__qualname__} failed: {exc}"
            )
            raise StorageError(f"{operation} failed: {exc}", cause=exc) from exc

    def _to_entity(self, row: dict[str, Any]) -> T:
        return row_to_model(self.entity_type, row)

    def _row_data(self, info: MappedTypeInfo, entity: T) -> dict[str, Any]:
        values = entity.model_dump(mode="json")
        data: dict[str, Any] = {}
        for name in info.column_names:
            if name in values:
                data[name] = values[name]
            else:
                column = info.column(name)
                data[name] = column.default if column else None
        return data

    def _primary_where(
        self, info: MappedTypeInfo, values: Iterable[Any]
    ) -> tuple[PredicateSpec, ...]:
        keys = info.primary_keys
        values = tuple(values)
        if len(values) != len(keys):
            raise ValueError(
                f"Expected {len(keys)} primary key value(s) for "
                f"{info.table_name}, got {len(values)}"
            )
        return tuple(
            PredicateSpec(key, Operator.EQ, value)
            for key, value in zip(keys, values, strict=True)
        )

    def list_all(self) -> list[T]:
        """Read every row of the table."""
        info = self._mapped()
        rows = self._call(
            "list_all",
            self.database.select,
            info.table_name,
            order_by=list(info.primary_keys),
        )
        return [self._to_entity(row) for row in rows]

    def read_one(self, *primary_values: Any) -> T | None:
        """Read the row with the given primary key values.

        Args:
            *primary_values: One value per primary key, in key order

        Returns:
            Entity or None if not found
        """
        info = self._mapped()
        rows = self._call(
            "read_one",
            self.database.select,
            info.table_name,
            where=self._primary_where(info, primary_values),
            limit=1,
        )
        return self._to_entity(rows[0]) if rows else None

    def read_one_by(self, criteria: Criteria, unique: bool | None = None) -> T | None:
        """Read the first row, in primary key order, matching ``criteria``.

        Args:
            criteria: Filter on the entity's columns
            unique: Fail when several rows match (defaults to ``strict_read_one``)

        Returns:
            Entity or None if no row matches

        Raises:
            InvalidCriteria: If the criteria names an unknown column
            AmbiguousResult: If ``unique`` and more than one row matches
        """
        info = self._mapped()
        where = self._translate(info, criteria)
        unique = self.strict_read_one if unique is None else unique

        rows = self._call(
            "read_one_by",
            self.database.select,
            info.table_name,
            where=where,
            glue=criteria.glue,
            order_by=list(info.primary_keys),
            limit=2 if unique else 1,
        )
        if unique and len(rows) > 1:
            raise AmbiguousResult(
                f"More than one {info.table_name} row matches {criteria!r}"
            )
        return self._to_entity(rows[0]) if rows else None

    def read_all_by(self, criteria: Criteria) -> Iterator[T]:
        """Iterate over every row matching ``criteria``.

        The criteria is checked immediately; the query runs when iteration
        starts. Calling again queries again.
        """
        info = self._mapped()
        where = self._translate(info, criteria)

        def rows() -> Iterator[T]:
            fetched = self._call(
                "read_all_by",
                self.database.select,
                info.table_name,
                where=where,
                glue=criteria.glue,
                order_by=list(info.primary_keys),
            )
            for row in fetched:
                yield self._to_entity(row)

        return rows()

    def count_by(self, criteria: Criteria | None = None) -> int:
        """Count rows matching ``criteria`` (all rows when omitted)."""
        info = self._mapped()
        criteria = criteria or Criteria()
        return self._call(
            "count_by",
            self.database.count,
            info.table_name,
            where=self._translate(info, criteria),
            glue=criteria.glue,
        )

    def create(self, entity: T) -> T:
        """Insert ``entity`` and fill in its auto-generated key.

        Returns:
            The same entity
        """
        info = self._mapped()
        data = self._row_data(info, entity)

        auto_column = info.auto_column_name
        if auto_column is not None and data.get(auto_column) is None:
            data.pop(auto_column, None)

        result = self._call("create", self.database.insert, info.table_name, data)

        if (
            auto_column is not None
            and getattr(entity, auto_column, None) is None
            and result.last_row_id is not None
        ):
            setattr(entity, auto_column, result.last_row_id)

        logger.debug(f"Created {info.table_name} row {data}")
        return entity

    def create_multiple(self, entities: Iterable[T]) -> list[T]:
        """Insert each entity in turn."""
        return [self.create(entity) for entity in entities]

    def update(self, entity: T) -> None:
        """Write the non-key columns of ``entity`` to its row."""
        info = self._mapped()
        data = self._row_data(info, entity)
        key_values = [
            data.pop(key) if key in data else getattr(entity, key, None)
            for key in info.primary_keys
        ]
        where = self._primary_where(info, key_values)

        if not data:
            logger.debug(f"Nothing to update in {info.table_name}")
            return

        updated = self._call(
            "update", self.database.update, info.table_name, data, where
        )
        if updated == 0:
            logger.warning(f"No {info.table_name} row updated for {where}")

    def delete(self, criteria: Criteria) -> int:
        """Delete rows matching ``criteria``.

        Returns:
            Number of rows deleted
        """
        info = self._mapped()
        where = self._translate(info, criteria)
        deleted = self._call(
            "delete",
            self.database.delete,
            info.table_name,
            where=where,
            glue=criteria.glue,
        )
        logger.debug(f"Deleted {deleted} {info.table_name} row(s)")
        return deleted

    def delete_one(self, entity: T) -> bool:
        """Delete the row of ``entity`` by primary key."""
        info = self._mapped()
        values = [getattr(entity, key, None) for key in info.primary_keys]
        deleted = self._call(
            "delete_one",
            self.database.delete,
            info.table_name,
            where=self._primary_where(info, values),
        )
        return deleted > 0
