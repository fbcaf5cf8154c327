from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    DATABASE_URL: SecretStr

    # Redis (optional; without it change notifications stay in-process)
    REDIS_URL: SecretStr | None = None
    CHANGE_FEED_PREFIX: str = "suds_changes"

    # Document namespace, matches the appId segment of the original collection paths
    APP_ID: str = "suds-registry"

    # CORS
    CORS_ORIGINS: str = "http://localhost:5173"

    # Rate Limiting
    RATE_LIMIT_GENERAL: str = "120/minute"
    RATE_LIMIT_WRITE: str = "60/minute"  # Reorder endpoints

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    # Server
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8000
    BACKEND_WORKERS: int = 1

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "DEBUG"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
