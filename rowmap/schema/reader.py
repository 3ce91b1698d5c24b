"""Reader deriving merged table metadata from a type graph."""

import importlib
import threading
from typing import Any

from rowmap.exceptions import CyclicTypeGraph, SchemaDefinitionError, TypeNotFound
from rowmap.log import get_logger
from rowmap.schema.cache import SchemaCache
from rowmap.schema.declarations import DescribesSchema, SchemaDeclaration
from rowmap.schema.descriptors import MappedTypeInfo

logger = get_logger(__name__)

TypeIdentity = type | str


class TypeRegistry:
    """Names under which mapped types can be looked up."""

    def __init__(self) -> None:
        self._types: dict[str, type] = {}

    def register(self, cls: type, name: str | None = None) -> type:
        """Register ``cls`` under ``name`` (its qualified name by default).

        Usable as a plain call or as a class decorator.
        """
        key = name or f"{cls.__module__}.{cls.__qualname__}"
        existing = self._types.get(key)
        if existing is not None and existing is not cls:
            raise SchemaDefinitionError(f"Type name already registered: {key}")
        self._types[key] = cls
        return cls

    def lookup(self, name: str) -> type | None:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types


def _import_type(path: str) -> type:
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")
    if not module_name or not attr_path:
        raise TypeNotFound(f"Not a type path: {path!r}")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise TypeNotFound(f"Cannot import module for {path!r}: {exc}") from exc

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise TypeNotFound(f"Type not found: {path!r}") from exc

    if not isinstance(target, type):
        raise TypeNotFound(f"{path!r} does not name a type")
    return target


class AttributesReader:
    """Resolve and cache the merged metadata of mapped types.

    A type contributes its own declarations, those of the fragments it
    composes (in declaration order) and those of its parent. The parent's
    metadata comes first, then the fragments', then the type's own:

    * the descendant's table name and auto column win,
    * primary keys accumulate ancestor first,
    * columns, indexes and foreign keys are concatenated, repeats included.

    Every node is merged at most once per cache.
    """

    def __init__(
        self,
        cache: SchemaCache[MappedTypeInfo] | None = None,
        registry: TypeRegistry | None = None,
    ) -> None:
        self.cache: SchemaCache[MappedTypeInfo] = (
            cache if cache is not None else SchemaCache()
        )
        self.registry = registry if registry is not None else TypeRegistry()
        self._merge_count = 0
        self._count_lock = threading.Lock()

    @property
    def merge_count(self) -> int:
        """Number of merges performed since construction."""
        return self._merge_count

    def resolve(self, type_identity: TypeIdentity) -> MappedTypeInfo:
        """Return the merged metadata of a type.

        Args:
            type_identity: A class, a registered name or an import path
                (``"package.module:Class"`` or ``"package.module.Class"``)

        Returns:
            Merged metadata, shared by every caller

        Raises:
            TypeNotFound: If the identity cannot be introspected
            CyclicTypeGraph: If the type graph references itself
        """
        return self._resolve(self.find_type(type_identity), ())

    def find_type(self, type_identity: TypeIdentity) -> type:
        """Turn a type identity into a class describing its schema."""
        if isinstance(type_identity, str):
            cls = self.registry.lookup(type_identity) or _import_type(type_identity)
        elif isinstance(type_identity, type):
            cls = type_identity
        else:
            raise TypeNotFound(f"Not a type identity: {type_identity!r}")

        if not isinstance(cls, DescribesSchema):
            raise TypeNotFound(f"{cls.__qualname__} does not describe a schema")
        return cls

    def _resolve(self, cls: type, path: tuple[type, ...]) -> MappedTypeInfo:
        if cls in path:
            chain = " -> ".join(node.__name__ for node in path + (cls,))
            raise CyclicTypeGraph(f"Type graph references itself: {chain}")

        return self.cache.get_or_compute(cls, lambda: self._merge(cls, path + (cls,)))

    def _merge(self, cls: type, path: tuple[type, ...]) -> MappedTypeInfo:
        logger.debug(f"Reading schema declarations of {cls.__qualname__}")
        with self._count_lock:
            self._merge_count += 1

        declaration: SchemaDeclaration = cls.describe_schema()  # type: ignore[attr-defined]
        own = MappedTypeInfo(
            table=declaration.table,
            columns=declaration.columns,
            indexes=declaration.indexes,
            foreign_keys=declaration.foreign_keys,
        )

        accumulated = MappedTypeInfo()
        for fragment in declaration.fragments:
            accumulated = accumulated.merged_with(
                self._resolve(self.find_type(fragment), path)
            )

        if declaration.parent is not None:
            parent = self._resolve(self.find_type(declaration.parent), path)
            accumulated = parent.merged_with(accumulated)

        info = accumulated.merged_with(own)
        logger.debug(
            f"Merged {cls.__qualname__}: table={info.table_name} "
            f"columns={len(info.columns)} indexes={len(info.indexes)} "
            f"foreign_keys={len(info.foreign_keys)}"
        )
        return info


_default_reader: AttributesReader | None = None


def default_reader() -> AttributesReader:
    """Reader shared by callers that do not wire their own."""
    global _default_reader
    if _default_reader is None:
        _default_reader = AttributesReader()
    return _default_reader


def table_information(type_identity: TypeIdentity) -> MappedTypeInfo:
    """Resolve a type with the default reader."""
    return default_reader().resolve(type_identity)
