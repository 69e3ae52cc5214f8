"""Client configuration loaded from the environment."""

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientConfig(BaseSettings):
    """
    File Depot client configuration.

    Uses Pydantic BaseSettings for automatic environment variable loading.
    Environment variables are prefixed with FILEDEPOT_.

    Required environment variables:
        FILEDEPOT_BASE_URL: File Depot server base URL (e.g., "http://localhost:8080")

    Optional environment variables:
        FILEDEPOT_TIMEOUT: Request timeout in seconds (default: 30)
    """

    model_config = SettingsConfigDict(
        env_prefix="FILEDEPOT_",
        extra="ignore",
    )

    # Server base URL - required, validated as URL
    base_url: HttpUrl

    # Transport timeout applied to connect, read, write and pool (seconds)
    timeout: float = Field(default=30.0, gt=0)
