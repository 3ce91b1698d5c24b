"""Abstract schema builder interface for different SQL backends."""

from abc import ABC, abstractmethod

from rowmap.schema.descriptors import IndexDescriptor, MappedTypeInfo


class SchemaBuilder(ABC):
    """Abstract schema builder for different SQL backends."""

    @abstractmethod
    def create_table_sql(self, info: MappedTypeInfo) -> str:
        """Generate CREATE TABLE SQL.

        Args:
            info: Merged metadata of a mapped type

        Returns:
            CREATE TABLE SQL statement
        """
        pass

    @abstractmethod
    def create_index_sql(self, table_name: str, index: IndexDescriptor) -> str:
        """Generate CREATE INDEX SQL.

        Args:
            table_name: Name of the table
            index: Index description

        Returns:
            CREATE INDEX SQL statement
        """
        pass

    @abstractmethod
    def drop_table_sql(self, table_name: str) -> str:
        """Generate DROP TABLE SQL.

        Args:
            table_name: Name of the table to drop

        Returns:
            DROP TABLE SQL statement
        """
        pass
