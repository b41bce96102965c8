"""
Configuration helpers for userbase.

Settings are read from the environment once and cached, so the store does not
fetch os.environ directly. Tests call ``get_settings.cache_clear()`` after
changing variables.
"""

from dataclasses import dataclass
from functools import lru_cache
import logging
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    root_file: str
    json_indent: int
    atomic_writes: bool
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        root_file=(os.getenv("USERBASE_ROOT_FILE") or "").strip(),
        json_indent=_int(os.getenv("USERBASE_JSON_INDENT", "4"), 4),
        atomic_writes=_bool(os.getenv("USERBASE_ATOMIC_WRITES"), True),
        log_level=(os.getenv("USERBASE_LOG_LEVEL") or "WARNING").upper(),
    )


def configure_logging() -> None:
    """Install a basic handler and apply the configured level to the userbase loggers."""
    settings = get_settings()
    logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
    logging.getLogger("userbase").setLevel(getattr(logging, settings.log_level, logging.WARNING))
