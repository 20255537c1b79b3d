"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Questlog")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Storage
    database_url: str = Field(
        default="sqlite:///./questlog.db",
        description="SQLAlchemy URL of the key-value store holding the snapshot",
    )
    snapshot_key: str = Field(
        default="questlog-data",
        description="Fixed key the snapshot is stored under",
    )

    # Calendar
    timezone: str | None = Field(
        default=None,
        description="IANA timezone used for calendar-day math (local zone when unset)",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str | None) -> str | None:
        """Reject names the tz database does not know."""
        if value is None or not value.strip():
            return None
        value = value.strip()
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {value}") from None
        return value

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON lines instead of the console format",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
