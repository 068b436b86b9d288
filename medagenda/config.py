"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    # Application
    app_name: str = Field(default="Medagenda", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    api_prefix: str = Field(default="", alias="API_PREFIX")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")
    registry_port: int = Field(default=8001, alias="REGISTRY_PORT")
    reload: bool = Field(default=False, alias="RELOAD")

    # Databases (one SQLite file per service)
    scheduling_database_url: str = Field(
        default="sqlite+aiosqlite:///./data/scheduling.db",
        alias="SCHEDULING_DATABASE_URL",
    )
    registry_database_url: str = Field(
        default="sqlite+aiosqlite:///./data/registry.db",
        alias="REGISTRY_DATABASE_URL",
    )

    # Registry service client
    registry_base_url: str = Field(default="http://localhost:8001", alias="REGISTRY_BASE_URL")
    registry_timeout_seconds: float = Field(default=10.0, alias="REGISTRY_TIMEOUT_SECONDS")

    # Scheduling policy
    conflict_window_minutes: int = Field(default=30, ge=0, alias="CONFLICT_WINDOW_MINUTES")
    allow_past_appointments: bool = Field(
        default=True,
        alias="ALLOW_PAST_APPOINTMENTS",
        description="Accept appointments whose scheduled time is already in the past",
    )
    allow_complete_awaiting_slot: bool = Field(
        default=True,
        alias="ALLOW_COMPLETE_AWAITING_SLOT",
        description="Allow completing an appointment that is still awaiting a slot",
    )

    # Notifications
    notification_dir: str = Field(
        default="./data/emails",
        alias="NOTIFICATION_DIR",
        description="Directory where simulated notification e-mails are written",
    )

    # CORS
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
