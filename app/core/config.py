"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App Info
    app_name: str = "Regatta Club API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8400
    workers: int = 1

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database
    data_save_folder: str = "./data"
    db_file: str = "regatta.db"
    database_url_override: str | None = Field(default=None, alias="DATABASE_URL")

    @property
    def database_url(self) -> str:
        """Database URL, SQLite file under the data folder unless overridden."""
        if self.database_url_override:
            return self.database_url_override
        db_path = Path(self.data_save_folder) / self.db_file
        return f"sqlite+aiosqlite:///{db_path}"

    # JWT identity tokens
    jwt_secret_key: str = Field(
        default="pT3vQ8mZr1xWbK6yHn2cLs9eJf4uAdG7",
        alias="JWT_SECRET_KEY",
    )
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24  # 24 hours
    jwt_issuer: str = "https://localhost:8400/"
    jwt_audience: str = "https://localhost:8400/"

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Database retry (linear backoff)
    db_retry_attempts: int = Field(default=3, ge=1)
    db_retry_delay: float = Field(default=1.0, ge=0)
    db_retry_max_delay: float = Field(default=5.0, ge=0)

    # Profile lookup cache
    profile_cache_ttl_seconds: int = Field(default=5 * 60, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        """Normalize log level names to loguru's upper-case form."""
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
