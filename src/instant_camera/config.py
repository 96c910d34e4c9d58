"""Application configuration."""

import os
import shlex

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = "file"
    storage_dir: str = ".instant_camera"
    storage_key: str = "retro-polaroid-photos"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "key_value_store"
    max_stored_photos: int = 50
    develop_time_ms: int = 1800
    shutter_delay_ms: int = 200
    print_cooldown_ms: int = 800
    video_device: int = 0
    video_ideal_size: int = 1280
    caption_font_path: str | None = None
    caption_timezone: str | None = None
    clipboard_command: str | None = None
    export_dir: str = "exports"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_command(raw: str | None) -> list[str] | None:
    """Split a configured command line into argv."""
    if raw is None:
        return None
    parts = shlex.split(raw)
    return parts or None
