"""Application configuration using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    # URL resolution
    default_base_url: str = Field(default="", alias="DEFAULT_BASE_URL")

    # HTML parsing
    html_parser: str = Field(default="html.parser", alias="HTML_PARSER")

    # Observability
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")


settings = Settings()
