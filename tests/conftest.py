from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from task_tracker.db import Database
from task_tracker.main import create_app
from task_tracker.repositories import TaskRepository
from task_tracker.services import TaskService
from task_tracker.settings import Settings


def make_settings(db_path: Path, **overrides: Any) -> Settings:
    values = dict(
        sqlite_db_path=str(db_path),
        cors_allow_origins=["*"],
        api_prefix="",
        recent_tasks_limit=5,
        db_timeout=5.0,
        log_level="WARNING",
        host="127.0.0.1",
        port=3000,
    )
    values.update(overrides)
    return Settings(**values)


class RecordingDatabase:
    """
    Stand-in storage that records every statement and returns canned rows.
    Used to prove which queries reach storage.
    """

    def __init__(self, rows: Optional[List[dict]] = None, one: Optional[dict] = None) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self._rows = rows or []
        self._one = one

    def execute(self, sql: str, params: Sequence[Any] = ()) -> Optional[int]:
        self.calls.append((sql, tuple(params)))
        return None

    def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[dict]:
        self.calls.append((sql, tuple(params)))
        return self._one

    def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[dict]:
        self.calls.append((sql, tuple(params)))
        return list(self._rows)


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.db"


@pytest.fixture()
def db(db_path: Path) -> Database:
    return Database(str(db_path))


@pytest.fixture()
def repo(db: Database) -> TaskRepository:
    return TaskRepository(db)


@pytest.fixture()
def service(repo: TaskRepository) -> TaskService:
    return TaskService(repo)


@pytest.fixture()
def settings(db_path: Path) -> Settings:
    return make_settings(db_path)


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)
