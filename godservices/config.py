"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    appwrite_endpoint: str = Field(
        default="https://sgp.cloud.appwrite.io/v1",
        description="Base URL of the Appwrite REST API",
        min_length=1,
    )
    appwrite_project_id: str = Field(
        description="Appwrite project identifier", min_length=1
    )
    appwrite_database_id: str = Field(
        description="Database holding the booking collections", min_length=1
    )
    appwrite_api_key: str | None = Field(
        default=None,
        description="Server API key, only needed by maintenance scripts",
    )
    appwrite_realtime_endpoint: str | None = Field(
        default=None,
        description="Realtime websocket URL; derived from the endpoint when unset",
    )
    appwrite_session: str | None = Field(
        default=None,
        description="Session secret sent to the realtime endpoint for authentication",
    )

    collection_users: str = "users"
    collection_workers: str = "workers"
    collection_customers: str = "customers"
    collection_bookings: str = "bookings"
    collection_services: str = "services"
    collection_audit_logs: str = "audit-logs"

    bucket_id_proofs: str = "id-proofs"
    bucket_qr_codes: str = "qr-codes"

    razorpay_key_id: str | None = Field(
        default=None, description="Public Razorpay key used by the checkout page"
    )

    notification_capacity: int = Field(
        default=20, gt=0, description="Maximum number of entries kept in the feed"
    )
    notification_history_limit: int = Field(
        default=5, gt=0, description="Number of recent bookings loaded on start"
    )
    alert_display_seconds: float = Field(
        default=4.0, ge=0, description="Seconds an alert stays visible"
    )
    alert_fade_seconds: float = Field(
        default=0.3, ge=0, description="Fade-out duration before an alert is removed"
    )
    realtime_queue_size: int = Field(
        default=100, gt=0, description="Pending realtime events buffered per subscription"
    )
    realtime_ping_interval: float = Field(
        default=20.0, gt=0, description="Seconds between realtime keepalive pings"
    )
    preferences_path: str = Field(
        default=".godservices/preferences.json",
        description="JSON file holding persisted UI preferences",
        min_length=1,
    )

    @model_validator(mode="after")
    def _validate_endpoint(self) -> "Settings":
        if not self.appwrite_endpoint.startswith(("http://", "https://")):
            raise ValueError("APPWRITE_ENDPOINT must be an http(s) URL")
        self.appwrite_endpoint = self.appwrite_endpoint.rstrip("/")
        return self

    @property
    def realtime_endpoint(self) -> str:
        """Return the websocket URL of the realtime service."""

        if self.appwrite_realtime_endpoint:
            return self.appwrite_realtime_endpoint.rstrip("/")
        if self.appwrite_endpoint.startswith("https://"):
            return "wss://" + self.appwrite_endpoint[len("https://"):]
        return "ws://" + self.appwrite_endpoint[len("http://"):]

    @property
    def bookings_channel(self) -> str:
        """Realtime channel that receives every booking document change."""

        return (
            f"databases.{self.appwrite_database_id}"
            f".collections.{self.collection_bookings}.documents"
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
