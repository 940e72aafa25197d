"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets and provider endpoints come from environment variables
    - get_settings() is cached (lru_cache), one instance per process
    - jwks_uri and issuer are derived from auth_domain, never configured separately

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://fleet:fleet@db:5432/fleet"
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
    database_create_all: bool = False

    # Upper bound on concurrent carrier writes during a bulk detach (keep below pool size)
    association_write_concurrency: int = 8

    # Identity provider (RS256 JWTs)
    auth_domain: str = "example.us.auth0.com"
    auth_audience: str | None = None
    auth_algorithms: list[str] = ["RS256"]
    jwks_cache_seconds: int = 300

    @property
    def jwks_uri(self) -> str:
        return f"https://{self.auth_domain}/.well-known/jwks.json"

    @property
    def auth_issuer(self) -> str:
        return f"https://{self.auth_domain}/"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]
    public_base_url: str | None = None

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
