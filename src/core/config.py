"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    debug: bool = Field(default=False)

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(
        default="console",
        description="Log renderer: 'console' or 'json'",
    )

    # Database
    database_url: str = Field(
        default="postgresql+asyncpg://localhost:5432/catalog",
        description="PostgreSQL connection URL with asyncpg driver",
    )

    # Caching
    cache_default_ttl_seconds: int = Field(
        default=3600,
        description="Lifetime of cached tag lists and tag counts",
    )

    # Catalog visibility
    ignore_store_limitations: bool = Field(
        default=False,
        description="Skip store mapping checks when counting visible items",
    )
    ignore_acl: bool = Field(
        default=False,
        description="Skip ACL checks when counting visible items",
    )
    guest_role_ids: list[int] = Field(
        default_factory=list,
        description="Role ids assumed when no actor is bound to the request",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def async_database_url(self) -> str:
        """Ensure the database URL uses the asyncpg driver scheme.

        Hosting providers often supply a standard ``postgresql://`` URL.
        SQLAlchemy's async engine requires ``postgresql+asyncpg://``.
        """
        url = self.database_url
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
