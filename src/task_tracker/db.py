from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager, suppress
from dataclasses import dataclass
from typing import Any, Generator, List, Optional, Sequence

from .errors import StorageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "task"
    id: str = "id"
    title: str = "title"
    description: str = "description"
    completed: str = "completed"
    created_at: str = "created_at"


COLS = _Cols()

Params = Sequence[Any]


class Database:
    """
    SQLite storage collaborator for the task table.

    Each call opens its own short-lived connection, so an instance can be
    shared by request handlers running on different threads. Driver errors
    never escape: they are re-raised as StorageError.
    """

    def __init__(self, db_path: str, timeout: float = 5.0) -> None:
        self._db_path = db_path
        self._timeout = timeout
        try:
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create database directory for {db_path}") from e
        self._init_db()
        logger.info("Database ready path=%s", db_path)

    @property
    def path(self) -> str:
        return self._db_path

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Yield a connection that commits on success and rolls back on error."""
        try:
            conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        except sqlite3.Error as e:
            logger.error("Cannot open database path=%s: %s", self._db_path, e)
            raise StorageError("Database is unavailable") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except (sqlite3.Error, OverflowError, UnicodeEncodeError) as e:
            # the driver raises the last two while binding out-of-range ints and lone surrogates
            with suppress(sqlite3.Error):
                conn.rollback()
            logger.error("Query failed: %s", e)
            raise StorageError("Database query failed") from e
        except Exception:
            with suppress(sqlite3.Error):
                conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self.connection() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {COLS.table} (
                    {COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                    {COLS.title} TEXT NOT NULL,
                    {COLS.description} TEXT NOT NULL DEFAULT '',
                    {COLS.completed} INTEGER NOT NULL DEFAULT 0,
                    {COLS.created_at} TEXT NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now'))
                )
                """
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{COLS.table}_completed ON {COLS.table}({COLS.completed})"
            )
            conn.execute(
                f"CREATE INDEX IF NOT EXISTS idx_{COLS.table}_created_at ON {COLS.table}({COLS.created_at})"
            )

    # PUBLIC_INTERFACE
    def execute(self, sql: str, params: Params = ()) -> Optional[int]:
        """
        Run a single write statement and return the last inserted row id
        (None when the statement inserted nothing).
        """
        with self.connection() as conn:
            cur = conn.execute(sql, tuple(params))
            return cur.lastrowid

    # PUBLIC_INTERFACE
    def fetch_one(self, sql: str, params: Params = ()) -> Optional[sqlite3.Row]:
        """Run a query and return its first row, or None."""
        with self.connection() as conn:
            return conn.execute(sql, tuple(params)).fetchone()

    # PUBLIC_INTERFACE
    def fetch_all(self, sql: str, params: Params = ()) -> List[sqlite3.Row]:
        """Run a query and return every row."""
        with self.connection() as conn:
            return conn.execute(sql, tuple(params)).fetchall()

    # PUBLIC_INTERFACE
    def ping(self) -> bool:
        """Return True when the database file can be read."""
        try:
            row = self.fetch_one("SELECT COUNT(*) AS n FROM sqlite_master")
        except StorageError:
            return False
        return row is not None
