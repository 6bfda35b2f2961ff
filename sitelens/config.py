"""Configuration management using Pydantic Settings."""

from enum import Enum

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


class AnalyzerConfig(BaseSettings):
    """Configuration for the sitelens analyzer."""

    # Browser settings
    headless: bool = True
    browser_timeout_ms: int = 20000
    navigation_retry_delay_ms: int = 1000
    viewport_width: int = 1280
    viewport_height: int = 720
    user_agent: str | None = None

    # AI enhancement
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "gemini_api_key",
            "SITELENS_GEMINI_API_KEY",
            "GEMINI_API_KEY",
        ),
    )
    gemini_model: str = "gemini-1.5-flash"
    enhancement_timeout_s: float = 30.0

    # Storage
    database_path: str = "sitelens.db"

    # Logging
    log_level: str = "INFO"
    log_format: LogFormat = LogFormat.CONSOLE

    model_config = {
        "env_prefix": "SITELENS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
