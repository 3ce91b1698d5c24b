"""SQLite-specific schema builder implementation."""

from typing import Any

from rowmap.database.interfaces.schema_builder import SchemaBuilder
from rowmap.exceptions import NotMapped
from rowmap.schema.descriptors import ColumnDescriptor, IndexDescriptor, MappedTypeInfo


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return str(value)
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"


class SQLiteSchemaBuilder(SchemaBuilder):
    """SQLite-specific schema builder."""

    def create_table_sql(self, info: MappedTypeInfo) -> str:
        """Generate CREATE TABLE SQL for SQLite.

        Repeated column names keep their last declaration. A single integer
        auto column becomes ``INTEGER PRIMARY KEY AUTOINCREMENT``; otherwise
        the primary key is emitted as a table constraint.

        Raises:
            NotMapped: If the metadata has no table
        """
        table = info.table
        if table is None:
            raise NotMapped("Cannot create a table without a table descriptor")

        # First position, last declaration.
        columns = {col.name: col for col in info.columns}
        inline_key = (
            table.auto_column_name is not None
            and table.primary_keys == (table.auto_column_name,)
        )

        definitions = [
            self._column_sql(col, inline_key and name == table.auto_column_name)
            for name, col in columns.items()
        ]

        if table.primary_keys and not inline_key:
            definitions.append(f"PRIMARY KEY ({', '.join(table.primary_keys)})")

        for fk in info.foreign_keys:
            definitions.append(
                f"CONSTRAINT {fk.name} FOREIGN KEY ({', '.join(fk.columns)}) "
                f"REFERENCES {fk.referenced_table} ({', '.join(fk.referenced_columns)}) "
                f"ON DELETE {fk.on_delete.value} ON UPDATE {fk.on_update.value}"
            )

        return (
            f"CREATE TABLE IF NOT EXISTS {table.table_name} "
            f"({', '.join(definitions)})"
        )

    def _column_sql(self, column: ColumnDescriptor, auto_key: bool) -> str:
        if auto_key:
            return f"{column.name} INTEGER PRIMARY KEY AUTOINCREMENT"

        col_def = f"{column.name} {column.sql_type}"
        if not column.nullable:
            col_def += " NOT NULL"
        if column.default is not None:
            col_def += f" DEFAULT {_literal(column.default)}"
        return col_def

    def create_index_sql(self, table_name: str, index: IndexDescriptor) -> str:
        unique = "UNIQUE " if index.unique else ""
        return (
            f"CREATE {unique}INDEX IF NOT EXISTS {index.name} "
            f"ON {table_name} ({', '.join(index.columns)})"
        )

    def drop_table_sql(self, table_name: str) -> str:
        return f"DROP TABLE IF EXISTS {table_name}"
