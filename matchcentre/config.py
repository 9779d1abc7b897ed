"""
Configuration helpers for the catalog service.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

LOGGER = logging.getLogger(__name__)

_ENV_FILES_READ = False

DEFAULT_DATABASE_URL = "sqlite:///.cache/matchcentre.sqlite"
DEFAULT_AUTH_WINDOW_MS = 240_000
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")


def _env_file_candidates() -> List[Path]:
    """Explicit ``MATCHCENTRE_ENV_FILE`` first, then ./.env, then the checkout's .env."""
    paths: List[Path] = []
    explicit = os.getenv("MATCHCENTRE_ENV_FILE")
    if explicit:
        paths.append(Path(explicit))
    for path in (Path.cwd() / ".env", Path(__file__).resolve().parents[1] / ".env"):
        if path not in paths:
            paths.append(path)
    return paths


def _parse_env_file(path: Path) -> Dict[str, str]:
    entries: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        key, sep, value = line.strip().partition("=")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        entries[key] = value.strip().strip("\"'")
    return entries


def _load_env_files() -> None:
    """
    Copy settings from .env files into the environment once per process.

    Variables that are already set win over file entries, and earlier files
    win over later ones.
    """
    global _ENV_FILES_READ  # noqa: PLW0603 - read once per process
    if _ENV_FILES_READ:
        return
    for path in _env_file_candidates():
        if not path.is_file():
            continue
        try:
            entries = _parse_env_file(path)
        except OSError as exc:
            LOGGER.warning("Could not read env file %s: %s", path, exc)
            continue
        for key, value in entries.items():
            os.environ.setdefault(key, value)
    _ENV_FILES_READ = True


def _split_csv(raw: Optional[str], default: Tuple[str, ...]) -> Tuple[str, ...]:
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class CatalogSettings:
    """
    Runtime configuration for the catalog API.
    """

    database_url: str
    api_secret: Optional[str]
    auth_window_ms: int = DEFAULT_AUTH_WINDOW_MS
    cors_allow_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"
    sql_echo: bool = False

    @property
    def auth_enabled(self) -> bool:
        return bool(self.api_secret)

    @classmethod
    def from_env(cls) -> "CatalogSettings":
        """
        Construct settings using environment variables with sensible defaults.
        """
        _load_env_files()
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            api_secret=os.getenv("API_SECRET") or None,
            auth_window_ms=_env_int("AUTH_WINDOW_MS", DEFAULT_AUTH_WINDOW_MS),
            cors_allow_origins=_split_csv(
                os.getenv("CORS_ALLOW_ORIGINS"), DEFAULT_CORS_ORIGINS
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            sql_echo=os.getenv("SQL_ECHO", "").lower() in {"1", "true", "yes"},
        )
