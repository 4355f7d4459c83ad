from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from dotenv import find_dotenv, load_dotenv

DEFAULT_RECENT_TASKS_LIMIT = 5


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    A `.env` file in the working directory is read first; variables already
    present in the environment win.

    Env vars:
    - SQLITE_DB_PATH: path to sqlite db file. Default './data/tasks.db'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    - API_PREFIX: path prefix for the task routes, e.g. '/api'. Default ''
    - RECENT_TASKS_LIMIT: size of the recent tasks window. Default 5
    - DB_TIMEOUT: seconds sqlite waits on a locked database. Default 5.0
    - LOG_LEVEL: root log level name. Default 'INFO'
    - HOST / PORT: bind address for `python -m task_tracker`. Default 0.0.0.0:3000
    """

    sqlite_db_path: str
    cors_allow_origins: List[str]
    api_prefix: str
    recent_tasks_limit: int
    db_timeout: float
    log_level: str
    host: str
    port: int


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_positive_int(value: str, default: int) -> int:
    try:
        parsed = int(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_positive_float(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


def _normalize_prefix(prefix: str) -> str:
    p = prefix.strip().rstrip("/")
    if p and not p.startswith("/"):
        p = "/" + p
    return p


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from `.env` and environment variables."""
    load_dotenv(find_dotenv(usecwd=True), override=False)

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()

    return Settings(
        sqlite_db_path=_get_env("SQLITE_DB_PATH", "./data/tasks.db").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*")),
        api_prefix=_normalize_prefix(os.getenv("API_PREFIX", "")),
        recent_tasks_limit=_parse_positive_int(
            _get_env("RECENT_TASKS_LIMIT", str(DEFAULT_RECENT_TASKS_LIMIT)), DEFAULT_RECENT_TASKS_LIMIT
        ),
        db_timeout=_parse_positive_float(_get_env("DB_TIMEOUT", "5.0"), 5.0),
        log_level=log_level,
        host=_get_env("HOST", "0.0.0.0").strip(),
        port=_parse_positive_int(_get_env("PORT", "3000"), 3000),
    )
