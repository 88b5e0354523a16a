"""Application configuration using pydantic-settings."""

from typing import Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Generator (any LiteLLM model identifier)
    model: str = "openai/gpt-4o-mini"
    openai_api_key: Optional[str] = None
    temperature: Optional[float] = None
    json_mode: bool = False  # Ask the provider for response_format=json_object

    # Retry loop
    max_retries: int = 5  # Retries after the first attempt (6 calls max)
    attempt_timeout: float = 60.0  # Seconds per generator round-trip
    strip_code_fences: bool = True

    # Shape compiler
    max_shape_depth: int = 32

    log_level: str = "INFO"

    model_config = {"env_prefix": "STRUCTIFY_"}

    @field_validator('max_retries')
    @classmethod
    def check_max_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_retries must be non-negative")
        return v

    @field_validator('attempt_timeout')
    @classmethod
    def check_attempt_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("attempt_timeout must be positive")
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level


settings = Settings()
