"""Tests for the SQLite schema builder."""

import pytest

from rowmap.database.implementations.sqlite import SQLiteSchemaBuilder
from rowmap.exceptions import NotMapped
from rowmap.schema import AttributesReader, IndexDescriptor
from tests.utils.models import Article, Draft, TagLink, User


@pytest.fixture
def builder() -> SQLiteSchemaBuilder:
    """Create a schema builder."""
    return SQLiteSchemaBuilder()


def test_auto_key_is_inlined(builder: SQLiteSchemaBuilder, reader: AttributesReader) -> None:
    """Test a single auto column becomes the rowid alias."""
    sql = builder.create_table_sql(reader.resolve(User))

    assert sql == (
        "CREATE TABLE IF NOT EXISTS app_user ("
        "created_at TEXT, updated_at TEXT, "
        "user_id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "username TEXT NOT NULL, email TEXT, age INTEGER)"
    )


def test_composite_key_constraint(
    builder: SQLiteSchemaBuilder, reader: AttributesReader
) -> None:
    """Test composite keys become a table constraint."""
    sql = builder.create_table_sql(reader.resolve(TagLink))

    assert sql == (
        "CREATE TABLE IF NOT EXISTS tag_link ("
        "article_id INTEGER NOT NULL, tag TEXT NOT NULL, "
        "PRIMARY KEY (article_id, tag))"
    )


def test_defaults_and_foreign_keys(
    builder: SQLiteSchemaBuilder, reader: AttributesReader
) -> None:
    """Test column defaults and foreign key constraints."""
    sql = builder.create_table_sql(reader.resolve(Article))

    assert "deleted INTEGER NOT NULL DEFAULT 0" in sql
    assert sql.endswith(
        "CONSTRAINT fk_app_user_author_id FOREIGN KEY (author_id) "
        "REFERENCES app_user (user_id) ON DELETE CASCADE ON UPDATE NO ACTION)"
    )


def test_table_required(builder: SQLiteSchemaBuilder, reader: AttributesReader) -> None:
    """Test types without a table cannot be created."""
    with pytest.raises(NotMapped):
        builder.create_table_sql(reader.resolve(Draft))


def test_index_sql(builder: SQLiteSchemaBuilder) -> None:
    """Test index statements."""
    assert builder.create_index_sql("app_user", IndexDescriptor(["email"])) == (
        "CREATE INDEX IF NOT EXISTS index_email ON app_user (email)"
    )
    assert builder.create_index_sql(
        "app_user", IndexDescriptor(["username"], unique=True, name="uq_name")
    ) == ("CREATE UNIQUE INDEX IF NOT EXISTS uq_name ON app_user (username)")


def test_drop_table_sql(builder: SQLiteSchemaBuilder) -> None:
    """Test drop statement."""
    assert builder.drop_table_sql("app_user") == "DROP TABLE IF EXISTS app_user"
