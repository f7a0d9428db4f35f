"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..models.source import AuthorType

DEFAULT_USER_AGENT = "SpaceNexus/1.0 (+https://spacenexus.us)"


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("spacenexus", description="Database name")
    user: str = Field("spacenexus", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(
        "SPACENEXUS_DB_PASSWORD", description="Environment variable for password"
    )


class FetchConfig(BaseModel):
    """Feed fetch parameters."""

    timeout_seconds: float = Field(15.0, description="Per-source timeout", gt=0, le=120)
    max_items_per_source: int = Field(20, description="Entries kept per feed", ge=1, le=200)
    excerpt_max_length: int = Field(300, description="Excerpt length bound", ge=20, le=5000)
    max_concurrent: int = Field(1, description="Feeds fetched at once (1 = sequential)", ge=1, le=20)
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header for feed requests")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field("INFO", description="Log level name")
    rich_tracebacks: bool = Field(True, description="Render tracebacks with rich")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and validate the level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class FreshnessConfig(BaseModel):
    """Data freshness thresholds."""

    max_stale_minutes: int = Field(360, description="Minutes before blog data counts as stale", ge=1)


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    freshness: FreshnessConfig = Field(default_factory=FreshnessConfig)


class SourceConfig(BaseModel):
    """Source configuration from sources.yaml."""

    slug: str = Field(..., description="Unique source slug", pattern=r"^[a-z0-9][a-z0-9-]*$")
    name: str = Field(..., description="Source name", min_length=1)
    url: str = Field(..., description="Site URL")
    feed_url: Optional[str] = Field(None, description="RSS/Atom feed URL")
    type: str = Field("blog", description="Source type")
    author_type: AuthorType = Field(..., description="Author type classification")
    author_name: Optional[str] = Field(None, description="Default author name")
    author_title: Optional[str] = Field(None, description="Default author title")
    description: Optional[str] = Field(None, description="Short description")
    image_url: Optional[str] = Field(None, description="Logo or avatar URL")
    is_active: bool = Field(True, description="Whether the source is fetched")
