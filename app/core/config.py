"""Euvou events service configuration settings."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

logger = structlog.stdlib.get_logger().bind(component="config")


class AwsSettings(BaseSettings):
    """AWS configuration settings."""

    AWS_REGION: str = Field(default="sa-east-1", alias="AWS_REGION")
    DYNAMODB_ENDPOINT_URL: Optional[str] = Field(
        default=None, alias="DYNAMODB_ENDPOINT_URL"
    )
    MAX_RETRIES: int = Field(default=3, alias="AWS_MAX_RETRIES")

    THROTTLING_ERRS: list[str] = [
        "Throttling",
        "ThrottlingException",
        "RequestLimitExceeded",
        "ProvisionedThroughputExceededException",
    ]
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class EventsSettings(BaseSettings):
    """Event catalogue settings (remote table, local replica, prober)."""

    EVENTS_TABLE_NAME: str = "euvou_events"
    EVENTS_STATUS_INDEX: str = "status-date-index"
    LOCAL_REPLICA_DIR: str = "./.euvou"
    LOCAL_REPLICA_KEY: str = "euvou_events"
    CONNECTIVITY_PROBE_INTERVAL_SECONDS: float = 10.0
    EVENTS_TIMEZONE: str = "America/Sao_Paulo"
    DEFAULT_ORGANIZER: str = "Organizador Anônimo"
    PLACEHOLDER_EVENT_IMAGE_URL: str = (
        "https://images.unsplash.com/photo-1492684223066-81342ee5ff30"
        "?auto=format&fit=crop&q=80&w=1000"
    )
    PLACEHOLDER_PARTICIPANT_PHOTO_URL: str = "https://i.pravatar.cc/150?u=default"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class CloudinarySettings(BaseSettings):
    """Cloudinary unsigned upload settings."""

    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_UPLOAD_PRESET: str = ""
    CLOUDINARY_API_URL: str = "https://api.cloudinary.com/v1_1"
    CLOUDINARY_TIMEOUT_SECONDS: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class ServerSettings(BaseSettings):
    """HTTP server settings."""

    ADMIN_API_TOKEN: str = ""
    ALLOWED_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Euvou configuration settings - main aggregator."""

    # General settings
    PREFIX: str = ""  # Used to determine the environment (e.g., "dev-" or "")
    LOG_LEVEL: str = "INFO"
    GIT_SHA: str = "Unknown"

    server: ServerSettings
    aws: AwsSettings
    events: EventsSettings
    cloudinary: CloudinarySettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return not bool(self.PREFIX)

    def __init__(self, **kwargs):
        settings_map = {
            "server": ServerSettings,
            "aws": AwsSettings,
            "events": EventsSettings,
            "cloudinary": CloudinarySettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
