"""Runner configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Values already exported by the runner take precedence over .env
load_dotenv(override=False)


class Settings(BaseSettings):
    """Settings read from the GitHub Actions runner environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # GitHub Actions runner
    github_event_path: str | None = None
    github_sha: str = ""
    github_repository: str = ""
    github_output: str | None = None
    github_api_url: str = "https://api.github.com"
    github_request_timeout: float = Field(default=30.0, gt=0)

    # Netlify CLI
    netlify_cli: str = "netlify"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
