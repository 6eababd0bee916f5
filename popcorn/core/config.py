"""Configuration management for Popcorn Movies."""

from pydantic import PositiveInt, field_validator
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from urllib.parse import urlparse


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OMDb
    omdb_api_key: str = "458491dc"
    omdb_base_url: str = "http://www.omdbapi.com/"

    # Database backing the watchlist store
    database_url: str = "sqlite:///./popcorn.db"
    watchlist_storage_key: str = "WatchedLocSto"

    # UI
    app_title: str = "Popcorn Movies"

    # Network settings
    request_timeout: PositiveInt | None = None  # seconds, no timeout when unset
    detail_cache_ttl: PositiveInt = 1800  # seconds a fetched movie detail is reused
    # Proxy configuration in the format http://host:port or socks5://host:port
    proxy: str | None = None

    @field_validator("proxy")
    @classmethod
    def validate_proxy(cls, v: str | None) -> str | None:
        if v is None:
            return v

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https", "socks4", "socks5", "socks5h"):
            raise ValueError(
                "Proxy must be a valid URL with scheme http/https/socks4/socks5/socks5h"
            )
        if not parsed.netloc:
            raise ValueError("Proxy must have a host and port")
        return v

    @field_validator("omdb_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("OMDb base URL must be an http/https URL")
        return v

    # App settings
    debug: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
