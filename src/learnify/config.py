"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_MONGODB_URI = "mongodb://localhost:27017/learnifypro"
DEFAULT_DATABASE = "learnifypro"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    mongodb_uri: str = DEFAULT_MONGODB_URI
    mongodb_database: str | None = None
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5000
    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    openai_api_key: str | None = None
    openai_model: str = "gpt-3.5-turbo"
    solution_strategy: str = "template"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
