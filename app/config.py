"""
Centralized configuration management

All configuration values are read from environment variables,
with sensible defaults for development.
"""

import os
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings

# Cached screenshots live next to the code, not the working directory.
_DEFAULT_CACHE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "cached_images"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # --- Server ---
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "info"
    cors_allow_origins: str = "*"

    # --- Cache ---
    cache_dir: str = _DEFAULT_CACHE_DIR

    # --- Renderer ---
    render_default_height: int = 1080  # viewport height used for full-page captures
    render_wait_until: str = "networkidle"
    render_navigation_timeout_ms: Optional[int] = None  # None = Playwright default
    # 0 = no limit on simultaneous browser launches.
    render_max_concurrency: int = 0
    render_dedupe_inflight: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return cached Settings instance (singleton)."""
    return Settings()
