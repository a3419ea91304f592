"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_ALLOWED_ORIGINS = "http://localhost:3000,https://nutri-snap-seven.vercel.app"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    google_api_key: str | None = None
    analysis_provider: str = "gemini"
    gemini_model: str = "gemini-2.5-flash"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    allowed_origins: str = DEFAULT_ALLOWED_ORIGINS
    max_upload_bytes: int = 10 * 1024 * 1024
    backend_url: str = "http://localhost:8000"
    storage_path: str = "~/.nutri_snap/storage.json"
    host: str = "127.0.0.1"
    port: int = 8000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse the comma-separated CORS origin list from env."""
    if raw is None:
        return []
    origins: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in origins:
            origins.append(value)
    return origins
