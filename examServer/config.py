"""Configuration settings for the exam server."""

import sys
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings, read from the environment and `.env`."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    mongodb_url: str = Field(default="mongodb://localhost:27017")
    database_name: str = "proctor_exam"

    # Code execution sandbox
    code_timeout_seconds: float = Field(default=3.0, gt=0)
    python_executable: str = sys.executable

    exam_key_length: int = Field(default=6, ge=4)

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    port: int = 5000


@lru_cache()
def get_settings() -> Settings:
    """Return the process-wide configuration."""
    return Settings()
