"""
Application settings for API Workbench.

Values can be overridden with environment variables prefixed with
``API_WORKBENCH_`` or through a local ``.env`` file.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(env_prefix="API_WORKBENCH_", env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./api_workbench.db"

    # Transport settings
    request_timeout: float = 30.0  # seconds
    max_redirects: int = 10
    verify_ssl: bool = True

    # Test script settings
    scripts_enabled: bool = True
    max_script_length: int = 20000  # characters

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
