from pydantic import Field, RedisDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below

    REDIS_URL and REDIS_TOKEN have no defaults: building Settings
    without them raises pydantic.ValidationError, so the process
    fails at startup instead of on the first tracked event.
    """

    # Environment
    environment: str = "development"
    debug: bool = False

    # Application
    app_name: str = "Insyte"
    app_version: str = "1.0.0"

    # Store connection (required)
    redis_url: RedisDsn  # redis:// or rediss://
    redis_token: str = Field(..., min_length=1)
    redis_socket_timeout: int = 2  # seconds, connect and read

    # Store settings
    store_backend: str = "redis"  # Options: "redis", "memory"
    retention: int = Field(60 * 60 * 24 * 7, gt=0)  # TTL of daily keys (7 days)

    # Page view middleware
    track_page_views: bool = False
    page_view_event: str = "page-view"
    geo_header: str = "cf-ipcountry"  # Header carrying the visitor's country

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
