"""Database engine factory for SQLModel."""

from pathlib import Path

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from rowmap.config import Settings
from rowmap.log import get_logger
from rowmap.types import Environment

logger = get_logger(__name__)

MEMORY_URL = "sqlite://"


def setup_database_url(environment: Environment, db_path: Path | None = None) -> str:
    """Construct database URL based on environment configuration.

    Args:
        environment: Environment type
        db_path: Optional custom database path. If provided, overrides default path.

    Returns:
        Database connection URL
    """
    if environment == Environment.TESTING and db_path is None:
        return MEMORY_URL

    if db_path is None:
        if environment == Environment.PRODUCTION:
            db_path = Path("db", "rowmap.db")
        elif environment == Environment.DEVELOPMENT:
            db_path = Path("db", "rowmap.dev.db")
        else:
            raise ValueError(f"Unknown environment: {environment}")

    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path}"


def create_database_engine(
    environment: Environment,
    echo: bool = False,
    db_path: Path | None = None,
    url: str | None = None,
) -> Engine:
    """Create database engine based on environment configuration.

    Args:
        environment: Environment type
        echo: Enable SQL echo for debugging
        db_path: Optional custom database path. If provided, overrides default path.
        url: Full database URL, overriding both of the above

    Returns:
        Configured engine
    """
    database_url = url or setup_database_url(environment, db_path)
    logger.info(f"Creating database engine for: {database_url}")

    if database_url == MEMORY_URL:
        # One shared connection, otherwise every checkout sees an empty database.
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        database_url,
        echo=echo,
        connect_args={"check_same_thread": False, "timeout": 60.0}
        if database_url.startswith("sqlite")
        else {},
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def engine_from_settings(settings: Settings) -> Engine:
    """Create the engine described by application settings."""
    return create_database_engine(
        settings.environment,
        echo=settings.echo_sql,
        db_path=settings.database_path,
        url=settings.database_url,
    )
