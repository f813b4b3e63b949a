"""Storefront configuration.

Loads settings from environment variables (``STOREFRONT_*``) or a ``.env``
file, with defaults suitable for running locally.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings shared by the HTTP and terminal front ends."""

    # Persistence
    storage_path: str = ".storefront/storage.json"
    cart_key: str = "cart"

    # Display
    currency_symbol: str = "¥"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8085

    model_config = SettingsConfigDict(
        env_prefix="STOREFRONT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    return Settings()
