from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Any, List, Optional

from .db import COLS, Database
from .errors import InvalidArgument, StorageError
from .models import TaskEntity

logger = logging.getLogger(__name__)

_SELECT = f"SELECT {COLS.id}, {COLS.title}, {COLS.description}, {COLS.completed}, {COLS.created_at} FROM {COLS.table}"
_NEWEST_FIRST = f"ORDER BY {COLS.created_at} DESC, {COLS.id} DESC"


def _coerce_count(value: Any) -> int:
    """
    Turn a COUNT(*) result into a non-negative int.

    Raises StorageError for anything that is not integer-like.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise StorageError(f"Non-numeric count returned by storage: {value!r}")
    try:
        count = int(value)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Non-numeric count returned by storage: {value!r}") from e
    if isinstance(value, float) and value != count:
        raise StorageError(f"Non-integer count returned by storage: {value!r}")
    if count < 0:
        raise StorageError(f"Negative count returned by storage: {count}")
    return count


# PUBLIC_INTERFACE
class TaskRepository:
    """
    Maps task rows to TaskEntity records and owns every query on the task table.

    Storage failures surface unchanged as StorageError. Business rules (title
    validation, completion state) belong to the service.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    def _row_to_entity(self, row: sqlite3.Row) -> TaskEntity:
        return {
            "id": int(row[COLS.id]),
            "title": str(row[COLS.title]),
            "description": row[COLS.description] if row[COLS.description] is not None else "",
            "completed": bool(row[COLS.completed]),
            "created_at": datetime.fromisoformat(row[COLS.created_at]),
        }

    # PUBLIC_INTERFACE
    def create(self, title: str, description: str) -> TaskEntity:
        """Insert an incomplete task and return the stored record."""
        new_id = self._db.execute(
            f"INSERT INTO {COLS.table} ({COLS.title}, {COLS.description}) VALUES (?, ?)",
            (title, description),
        )
        if new_id is None:
            raise StorageError("Insert did not return a task id")
        created = self.find_by_id(new_id)
        if created is None:
            raise StorageError(f"Task {new_id} vanished after insert")
        return created

    # PUBLIC_INTERFACE
    def find_by_id(self, task_id: int) -> Optional[TaskEntity]:
        """Return the task with this id, or None."""
        row = self._db.fetch_one(f"{_SELECT} WHERE {COLS.id} = ?", (task_id,))
        return self._row_to_entity(row) if row else None

    # PUBLIC_INTERFACE
    def find_recent_incomplete(self, limit: int) -> List[TaskEntity]:
        """
        Return up to `limit` incomplete tasks, newest first.

        Raises InvalidArgument, before touching storage, unless limit is a
        positive int.
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
            raise InvalidArgument("Limit must be a positive integer")
        rows = self._db.fetch_all(
            f"{_SELECT} WHERE {COLS.completed} = 0 {_NEWEST_FIRST} LIMIT ?",
            (limit,),
        )
        return [self._row_to_entity(r) for r in rows]

    # PUBLIC_INTERFACE
    def mark_completed(self, task_id: int) -> Optional[TaskEntity]:
        """
        Set completed for the task and return the re-read record.

        Existence and prior state are not checked here.
        """
        self._db.execute(f"UPDATE {COLS.table} SET {COLS.completed} = 1 WHERE {COLS.id} = ?", (task_id,))
        return self.find_by_id(task_id)

    # PUBLIC_INTERFACE
    def find_all(self) -> List[TaskEntity]:
        """Return every task, newest first."""
        rows = self._db.fetch_all(f"{_SELECT} {_NEWEST_FIRST}")
        return [self._row_to_entity(r) for r in rows]

    # PUBLIC_INTERFACE
    def count_incomplete(self) -> int:
        """Return the number of incomplete tasks."""
        row = self._db.fetch_one(f"SELECT COUNT(*) AS cnt FROM {COLS.table} WHERE {COLS.completed} = 0")
        return _coerce_count(row["cnt"] if row else None)
