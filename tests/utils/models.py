"""Mapped types shared by the rowmap tests."""

from rowmap.schema import Fragment, Row, column, foreign_key, index, table
from rowmap.types import ReferentialAction


@column("created_at", "TEXT")
@column("updated_at", "TEXT")
class Timestamped(Fragment):
    """Fragment adding audit timestamps."""

    created_at: str | None = None
    updated_at: str | None = None


@column("deleted", "INTEGER", nullable=False, default=0)
@index(["deleted"])
class SoftDeletable(Fragment):
    """Fragment adding a soft-delete flag."""

    deleted: bool = False


@table("app_user", primary_keys=["user_id"], auto_column="user_id")
@column("user_id", "INTEGER", nullable=False)
@column("username", "TEXT", nullable=False)
@column("email", "TEXT")
@column("age", "INTEGER")
@index(["username"], unique=True)
class User(Timestamped, Row):
    """User account."""

    user_id: int | None = None
    username: str
    email: str | None = None
    age: int | None = None


@column("role", "TEXT", nullable=False, default="admin")
class Admin(User):
    """User with an administrative role, stored in the user table."""

    role: str = "admin"


@table("article", primary_keys=["article_id"], auto_column="article_id")
@column("article_id", "INTEGER", nullable=False)
@column("author_id", "INTEGER", nullable=False)
@column("title", "TEXT", nullable=False)
@foreign_key(
    ["author_id"], "app_user", ["user_id"], on_delete=ReferentialAction.CASCADE
)
class Article(Timestamped, SoftDeletable, Row):
    """Article written by a user."""

    article_id: int | None = None
    author_id: int
    title: str


@table("tag_link", primary_keys=["article_id", "tag"])
@column("article_id", "INTEGER", nullable=False)
@column("tag", "TEXT", nullable=False)
class TagLink(Row):
    """Composite-key link between an article and a tag."""

    article_id: int
    tag: str


class Draft(Timestamped, Row):
    """Columns only, no table anywhere in the hierarchy."""

    created_at: str | None = None


@table("keyless")
@column("value", "TEXT")
class Keyless(Row):
    """Table declared without a primary key."""

    value: str | None = None
