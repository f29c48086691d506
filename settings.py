from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from persistence.paths import default_people_path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Persistence
    person_db_path: Path

    # Server
    host: str
    port: int

    # Logging
    log_level: str
    debug_log_requests: bool


def get_settings() -> Settings:
    raw_path = os.getenv("PERSON_DB_PATH", "").strip()
    person_db_path = Path(raw_path).expanduser() if raw_path else default_people_path()

    host = os.getenv("HOST", "127.0.0.1").strip() or "127.0.0.1"
    port = _env_int("PORT", 8080)

    log_level = (os.getenv("LOG_LEVEL", "INFO").strip() or "INFO").upper()
    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    return Settings(
        person_db_path=person_db_path,
        host=host,
        port=port,
        log_level=log_level,
        debug_log_requests=debug_log_requests,
    )
