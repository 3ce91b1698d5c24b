"""Tests for schema declaration decorators."""

import pytest

from rowmap.exceptions import SchemaDefinitionError
from rowmap.schema import DescribesSchema, Fragment, Row, column, index, table
from tests.utils.models import Admin, Article, SoftDeletable, Timestamped, User


def test_decorators_keep_reading_order() -> None:
    """Test stacked decorators record columns top to bottom."""
    declaration = User.describe_schema()

    assert [col.name for col in declaration.columns] == [
        "user_id",
        "username",
        "email",
        "age",
    ]
    assert declaration.table is not None
    assert declaration.table.table_name == "app_user"
    assert [idx.name for idx in declaration.indexes] == ["index_username"]


def test_own_declarations_are_not_inherited() -> None:
    """Test a subclass only reports what it declares itself."""
    declaration = Admin.describe_schema()

    assert declaration.table is None
    assert [col.name for col in declaration.columns] == ["role"]
    assert declaration.parent is User
    assert declaration.fragments == ()


def test_fragments_follow_base_order() -> None:
    """Test fragments are the direct Fragment bases in declaration order."""
    declaration = Article.describe_schema()

    assert declaration.fragments == (Timestamped, SoftDeletable)
    assert declaration.parent is None


def test_mapped_types_describe_schema() -> None:
    """Test rows and fragments satisfy the capability protocol."""
    assert isinstance(User, DescribesSchema)
    assert isinstance(Timestamped, DescribesSchema)
    assert not isinstance(int, DescribesSchema)


def test_second_table_is_rejected() -> None:
    """Test a class cannot declare two tables."""
    with pytest.raises(SchemaDefinitionError, match="more than one table"):

        @table("a", ["id"])
        @table("b", ["id"])
        class Twice(Row):
            pass


def test_two_mapped_parents_are_rejected() -> None:
    """Test only one mapped parent is allowed."""

    @table("left", ["id"])
    class Left(Row):
        pass

    @table("right", ["id"])
    class Right(Row):
        pass

    class Both(Left, Right):
        pass

    with pytest.raises(SchemaDefinitionError, match="more than one mapped parent"):
        Both.describe_schema()


def test_fragment_can_compose_fragments() -> None:
    """Test a fragment deriving from another fragment lists it."""

    @column("extra")
    @index("extra")
    class Extended(Timestamped):
        pass

    declaration = Extended.describe_schema()

    assert declaration.fragments == (Timestamped,)
    assert [col.name for col in declaration.columns] == ["extra"]


def test_undecorated_row_declares_nothing() -> None:
    """Test a bare row has an empty declaration."""

    class Bare(Row):
        pass

    declaration = Bare.describe_schema()

    assert declaration.table is None
    assert declaration.columns == ()
    assert declaration.parent is None


def test_fragment_base_is_not_a_fragment_of_itself() -> None:
    """Test the marker classes are skipped."""
    assert Fragment.describe_schema().fragments == ()
    assert Row.describe_schema().parent is None


def test_parent_composing_fragments_stays_parent() -> None:
    """Test a row mixing in fragments is the parent of its subclasses."""

    @column("subtitle")
    class Subtitled(Fragment):
        pass

    class Extended(Subtitled, Article):
        pass

    declaration = Extended.describe_schema()

    assert declaration.parent is Article
    assert declaration.fragments == (Subtitled,)


def test_two_parents_composing_fragments_are_rejected() -> None:
    """Test the single parent rule holds for rows with fragments."""

    class Both(User, Article):
        pass

    with pytest.raises(SchemaDefinitionError, match="more than one mapped parent"):
        Both.describe_schema()
