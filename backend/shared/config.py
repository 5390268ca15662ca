"""
Centralized configuration for the SkillSwap backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, PROFILE_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SkillSwap"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Which collaborator implementations the container wires up
    backend: Literal["memory", "supabase"] = "memory"

    # Supabase (end-user client, so only the anon key is needed)
    supabase_url: str = ""
    supabase_anon_key: str = ""

    # Profile storage
    profiles_table: str = "users"
    profile_pictures_bucket: str = "profiles"

    # Local session cache
    session_cache_path: str = "~/.skillswap/session.json"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
