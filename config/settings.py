from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

from db.errors import ConfigurationError


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _getenv(*names: str, default: str | None = None) -> str | None:
    for name in names:
        value = os.getenv(name)
        if value is not None and value.strip():
            return value.strip()
    return default


def _getint(name: str, default: int) -> int:
    raw = _getenv(name, default=str(default))
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a whole number of seconds, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    # Backend (Supabase REST)
    supabase_url: str | None
    supabase_anon_key: str | None
    supabase_service_role_key: str | None

    request_timeout_seconds: int

    log_level: str

    # Offline mode: JSON fixtures served by the in-memory backend
    fixtures_path: str | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        supabase_url=_getenv("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
        supabase_anon_key=_getenv("SUPABASE_ANON_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"),
        supabase_service_role_key=_getenv("SUPABASE_SERVICE_ROLE_KEY"),
        request_timeout_seconds=_getint("REQUEST_TIMEOUT", 30),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        fixtures_path=_getenv("FIXTURES_PATH"),
    )
