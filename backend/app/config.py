"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - AUTH_JWT_SECRET has no default and must be at least 32 characters
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Auth settings describe how to VERIFY provider-issued tokens; this service never issues them
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://ats:ats@db:5432/ats"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth provider (token verification only)
    # Required, no default
    auth_jwt_secret: str = Field(min_length=32)
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: str = "authenticated"

    # Master admin bootstrap — empty string disables the endpoint
    setup_token: str = ""

    # Deduplication
    dedup_fuzzy_threshold: float = 0.4
    dedup_scan_limit: int = 1000

    # Pagination
    default_page_size: int = 50
    max_page_size: int = 200

    # Startup
    seed_permissions_on_startup: bool = True

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
