from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    # Upstream recommendation service the passthrough forwards to. Empty = not configured.
    API_BASE: str = ""
    # Where the rating client reaches this app (catalog CSV + passthrough)
    APP_BASE_URL: str = "http://localhost:8000"
    API_PREFIX: str = "/api/proxy"
    CATALOG_PATH: str = "/anime.csv"
    CATALOG_FILE: str = "app/static/anime.csv"

    PAGE_SIZE: int = 25
    DEFAULT_TOP_K: int = 10
    REQUEST_TIMEOUT: float = 30.0
    # Transport-level retries only; recommendation submissions are never replayed on HTTP errors
    MAX_RETRIES: int = 1

    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"


settings = Settings()

