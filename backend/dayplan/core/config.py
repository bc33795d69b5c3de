"""
Application configuration using Pydantic Settings.

Segment lengths and the default timezone are read from the environment so that
a host can change the planning rhythm without touching the engine.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Segment rhythm
    # ===========================================
    # Length of one work unit and of the break that follows it (minutes)
    WORK_MINUTES: int = Field(25, gt=0)
    BREAK_MINUTES: int = Field(5, ge=0)

    # IANA timezone used to place "HH:MM" day blocks on the timeline
    TIMEZONE: str = "UTC"

    # ===========================================
    # Execution overlay
    # ===========================================
    # Priority values that mark a todo as a point-in-time marker
    # (66 = person, 88 = money, 99 = thing)
    MARKER_PRIORITIES: dict[int, str] = Field(
        default={66: "person", 88: "money", 99: "thing"}
    )

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
