"""Minimal JSON Diff settings."""

import logging
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(
    BaseSettings, env_prefix="MINIMAL_JSON_DIFF_", env_file=".env", extra="ignore"
):
    """Settings, read from ``MINIMAL_JSON_DIFF_*`` environment variables or ``.env``."""

    indent: int | None = None
    """Indentation of emitted patches. Compact output when unset."""

    ensure_ascii: bool = False
    """Escape non-ASCII characters in emitted JSON text."""

    log_file: Path | None = Path(".minimal_json_diff.log")
    """Where the command line interface writes its log. ``None`` logs to stderr."""

    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {v!r}")
        return level


settings = Settings()  # type: ignore
