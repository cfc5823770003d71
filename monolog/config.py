"""Environment configuration using Pydantic Settings."""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings

from monolog.utils.validators import split_csv


class Settings(BaseSettings):
    """Logger defaults loaded from ``MONOLOG_*`` environment variables / .env."""

    # ── Gate ────────────────────────────────────────
    LEVEL: str = "INFO"

    # ── Output ──────────────────────────────────────
    ENCODING: str = "json"
    OUTPUT_PATHS: str = "stdout"
    ERROR_OUTPUT_PATHS: str = "stderr"
    TIME_FORMAT: Optional[str] = "iso"

    # ── Annotations ─────────────────────────────────
    ENABLE_CALLER: bool = False
    ENABLE_STACKTRACE: bool = False

    # ── Derived helpers ─────────────────────────────
    @property
    def output_paths(self) -> List[str]:
        return split_csv(self.OUTPUT_PATHS)

    @property
    def error_output_paths(self) -> List[str]:
        return split_csv(self.ERROR_OUTPUT_PATHS)

    model_config = {"env_prefix": "MONOLOG_", "env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache()
def get_settings() -> Settings:
    """Return a cached singleton of the environment settings."""
    return Settings()
