"""Application settings loaded from environment variables and an optional .env file."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from threading import Lock
from typing import Optional


DEFAULT_DATABASE_URL = "sqlite:///data/registrations.db"
DEFAULT_CONFERENCE_NAME = "TechConf 2025"
DEFAULT_CONFERENCE_TAGLINE = "Register for the Future of Technology"

_ENV_KEYS = {"DATABASE_URL", "LOG_LEVEL", "CONFERENCE_NAME", "CONFERENCE_TAGLINE"}

_ENV_LOADED = False
_ENV_LOCK = Lock()
_LOGGING_CONFIGURED = False


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the registration app."""

    database_url: str
    log_level: str
    conference_name: str
    conference_tagline: str


def _load_env(env_path: Optional[Path] = None) -> None:
    """Load known settings from .env file if present. Existing variables win."""
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        env_path = env_path or Path(".env")
        if env_path.exists():
            for raw_line in env_path.read_text(encoding="utf-8").splitlines():
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"\'')

                if key in _ENV_KEYS and key not in os.environ:
                    os.environ[key] = value

        _ENV_LOADED = True


def _reset_env_cache() -> None:
    """Forget that .env was loaded (used by tests)."""
    global _ENV_LOADED
    _ENV_LOADED = False


def get_settings() -> Settings:
    """
    Build settings from the environment.

    Returns:
        Settings with defaults applied for missing variables
    """
    _load_env()

    return Settings(
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        conference_name=os.getenv("CONFERENCE_NAME") or DEFAULT_CONFERENCE_NAME,
        conference_tagline=os.getenv("CONFERENCE_TAGLINE") or DEFAULT_CONFERENCE_TAGLINE,
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once per process."""
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _LOGGING_CONFIGURED = True
