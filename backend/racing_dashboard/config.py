"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - Upstream endpoints are frozen into UpstreamConfig once at startup;
      request handlers never read the environment

Design Decisions:
    - A missing URL or API key leaves the capability "not configured" rather
      than failing startup: race providers degrade, weather/files raise per call
"""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


@dataclass(frozen=True)
class UpstreamEndpoint:
    """One external capability: URL + shared secret sent as x-api-key."""
    name: str
    url: str | None
    api_key: str | None
    timeout_seconds: float

    @property
    def configured(self) -> bool:
        return bool(self.url and self.api_key)


@dataclass(frozen=True)
class UpstreamConfig:
    """Immutable snapshot of every upstream capability."""
    weather: UpstreamEndpoint
    motogp: UpstreamEndpoint
    f1: UpstreamEndpoint
    file_handler: UpstreamEndpoint
    upload_timeout_seconds: float


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Database
    database_url: str = (
        "postgresql+asyncpg://dashboard:dashboard@db:5432/racing_dashboard"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 5

    # Upstream functions
    weather_lambda_url: str | None = None
    weather_lambda_api_key: str | None = None
    motogp_lambda_url: str | None = None
    motogp_lambda_api_key: str | None = None
    f1_lambda_url: str | None = None
    f1_lambda_api_key: str | None = None
    file_handler_lambda_url: str | None = None
    file_handler_lambda_api_key: str | None = None

    upstream_timeout_seconds: float = 10.0
    upload_timeout_seconds: float = 30.0

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:4200"]
    identity_header: str = "x-user-id"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def upstream_config(self) -> UpstreamConfig:
        """Assemble the immutable upstream configuration."""
        timeout = self.upstream_timeout_seconds
        return UpstreamConfig(
            weather=UpstreamEndpoint(
                "weather", self.weather_lambda_url,
                self.weather_lambda_api_key, timeout,
            ),
            motogp=UpstreamEndpoint(
                "motogp", self.motogp_lambda_url,
                self.motogp_lambda_api_key, timeout,
            ),
            f1=UpstreamEndpoint(
                "f1", self.f1_lambda_url, self.f1_lambda_api_key, timeout,
            ),
            file_handler=UpstreamEndpoint(
                "file_handler", self.file_handler_lambda_url,
                self.file_handler_lambda_api_key, timeout,
            ),
            upload_timeout_seconds=self.upload_timeout_seconds,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
