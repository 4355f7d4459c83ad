"""
Run the API server with uvicorn.

Usage:
    python -m task_tracker

HOST, PORT and LOG_LEVEL come from the environment (or `.env`).
"""
from __future__ import annotations

import uvicorn

from .settings import get_settings

_UVICORN_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def main() -> None:
    settings = get_settings()
    level = settings.log_level.lower()
    uvicorn.run(
        "task_tracker.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=level if level in _UVICORN_LEVELS else "info",
    )


if __name__ == "__main__":
    main()
