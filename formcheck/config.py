"""Application configuration via environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    # Form behaviour
    FORM_MODE: Literal["onSubmit", "onChange"] = "onChange"

    # Date inputs accepted besides ISO 8601, tried in order
    DATE_FORMATS: list[str] = ["%d/%m/%Y", "%Y/%m/%d"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
