"""Table metadata declaration, merging and caching."""

from .cache import SchemaCache
from .declarations import (
    DescribesSchema,
    Fragment,
    Mapped,
    Row,
    SchemaDeclaration,
    column,
    foreign_key,
    index,
    table,
)
from .descriptors import (
    ColumnDescriptor,
    ForeignKeyDescriptor,
    IndexDescriptor,
    MappedTypeInfo,
    TableDescriptor,
)
from .reader import AttributesReader, TypeRegistry, default_reader, table_information

__all__ = [
    "AttributesReader",
    "ColumnDescriptor",
    "DescribesSchema",
    "ForeignKeyDescriptor",
    "Fragment",
    "IndexDescriptor",
    "Mapped",
    "MappedTypeInfo",
    "Row",
    "SchemaCache",
    "SchemaDeclaration",
    "TableDescriptor",
    "TypeRegistry",
    "column",
    "default_reader",
    "foreign_key",
    "index",
    "table",
    "table_information",
]
