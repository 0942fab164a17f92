# config.py

"""Application configuration utilities.

Values are primarily loaded from ``config.json`` and may be overridden by
environment variables. The :func:`get_settings` helper merges the two sources
and caches the result.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings merged from JSON and environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    host: str = "0.0.0.0"  # nosec B104: demo server binds all interfaces
    port: int = 8888
    log_level: str = "INFO"
    advance_threshold: int = 10
    advance_on_list: bool = True
    double_advance_on_fetch: bool = False
    status_images: bool = True
    tracker_link_base: str = "http://localhost:8888/order/"
    tracker_url: str = "http://localhost:8888/"
    tracker_interval_secs: float = 30.0
    tracker_error_limit: int = 5
    tracker_retention_hours: int = 12
    tracker_notify_provider: str = "log"
    tracker_notify_target: Optional[str] = None


# Cached singleton to avoid repeated file reads
@lru_cache
def get_settings() -> Settings:
    """Return merged settings with environment variable precedence.

    The configuration is read from ``config.json`` located alongside this file
    and fed into :class:`Settings`. Environment variables override any values
    from the JSON file. A missing file falls back to the field defaults.
    """

    config_path = Path(__file__).with_name("config.json")
    data = json.loads(config_path.read_text()) if config_path.exists() else {}
    env_override = {
        k.lower(): v
        for k, v in os.environ.items()
        if k.lower() in Settings.model_fields
    }
    merged = {**data, **env_override}
    # Environment variables override values from the JSON file.
    return Settings(**merged)
