"""Configuration management for the rowmap system."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .types import Environment


class Settings(BaseModel):
    """Application settings."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    # Database
    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy URL; overrides database_path when set",
    )
    database_path: Path | None = Field(
        default=None, description="SQLite database file"
    )
    echo_sql: bool = Field(default=False, description="Echo executed SQL")

    # CRUD
    strict_read_one: bool = Field(
        default=False,
        description="Raise AmbiguousResult when read_one_by matches several rows",
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "yes", "on"]


def load_settings() -> Settings:
    """Load settings from ``ROWMAP_*`` environment variables."""

    # Load .env file if it exists
    load_dotenv()

    database_path = os.getenv("ROWMAP_DATABASE_PATH")

    return Settings(
        environment=Environment(os.getenv("ROWMAP_ENV", "development")),
        log_level=os.getenv("ROWMAP_LOG_LEVEL", "INFO").upper(),
        database_url=os.getenv("ROWMAP_DATABASE_URL") or None,
        database_path=Path(database_path) if database_path else None,
        echo_sql=_env_flag("ROWMAP_ECHO_SQL"),
        strict_read_one=_env_flag("ROWMAP_STRICT_READ_ONE"),
    )


# Global settings instance
settings = load_settings()
