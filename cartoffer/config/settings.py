from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal


class Settings(BaseSettings):
    # Database
    database_url: str = "duckdb://:memory:"

    # Offer store backend: memory | duckdb
    offer_store: Literal["memory", "duckdb"] = "memory"

    # User segment source: static uses the local map, http calls the mock server
    segment_source: Literal["static", "http"] = "static"
    segment_service_url: str = "http://localhost:1080"
    segment_timeout: float = 5.0

    # API
    api_title: str = "Cart Offer API"
    api_version: str = "1.0.0"
    api_prefix: str = "/api/v1"

    # Service ports (also used by the status checker)
    app_host: str = "localhost"
    app_port: int = 9001
    mock_server_port: int = 1080

    # Development mode
    debug: bool = False

    model_config = SettingsConfigDict(
        env_prefix="CARTOFFER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

