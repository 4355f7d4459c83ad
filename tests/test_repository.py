from datetime import datetime

import pytest

from conftest import RecordingDatabase
from task_tracker.errors import InvalidArgument, StorageError
from task_tracker.repositories import TaskRepository


class TestCreateAndFind:
    def test_create_returns_stored_record(self, repo):
        task = repo.create("Write docs", "for the API")
        assert isinstance(task["id"], int)
        assert task["title"] == "Write docs"
        assert task["description"] == "for the API"
        assert task["completed"] is False
        assert isinstance(task["created_at"], datetime)

    def test_round_trip(self, repo):
        created = repo.create("Round trip", "same fields")
        fetched = repo.find_by_id(created["id"])
        assert fetched is not None
        assert fetched["id"] == created["id"]
        assert fetched["title"] == created["title"]
        assert fetched["description"] == created["description"]

    def test_find_by_id_missing(self, repo):
        assert repo.find_by_id(424242) is None

    def test_ids_are_unique(self, repo):
        ids = {repo.create(f"Task {i}", "")["id"] for i in range(5)}
        assert len(ids) == 5


class TestRecentIncomplete:
    def test_newest_first_and_limited(self, repo):
        ids = [repo.create(f"Task {i}", "")["id"] for i in range(7)]
        recent = repo.find_recent_incomplete(5)
        assert [t["id"] for t in recent] == ids[::-1][:5]

    def test_excludes_completed(self, repo):
        keep = repo.create("keep", "")
        done = repo.create("done", "")
        repo.mark_completed(done["id"])
        assert [t["id"] for t in repo.find_recent_incomplete(10)] == [keep["id"]]

    def test_empty(self, repo):
        assert repo.find_recent_incomplete(5) == []

    @pytest.mark.parametrize("limit", [0, -1, 2.5, "5", None, True])
    def test_invalid_limit_never_reaches_storage(self, limit):
        db = RecordingDatabase()
        repo = TaskRepository(db)
        with pytest.raises(InvalidArgument, match="Limit must be a positive integer"):
            repo.find_recent_incomplete(limit)
        assert db.calls == []

    def test_limit_is_bound_parameter(self):
        db = RecordingDatabase()
        TaskRepository(db).find_recent_incomplete(3)
        (sql, params), = db.calls
        assert "LIMIT ?" in sql
        assert "3" not in sql
        assert params == (3,)


class TestMarkCompleted:
    def test_mark_completed(self, repo):
        task = repo.create("finish", "")
        updated = repo.mark_completed(task["id"])
        assert updated["id"] == task["id"]
        assert updated["completed"] is True
        assert repo.find_by_id(task["id"])["completed"] is True

    def test_mark_completed_missing_returns_none(self, repo):
        assert repo.mark_completed(99) is None


class TestFindAllAndCount:
    def test_find_all_includes_completed(self, repo):
        a = repo.create("a", "")
        b = repo.create("b", "")
        repo.mark_completed(a["id"])
        assert [t["id"] for t in repo.find_all()] == [b["id"], a["id"]]

    def test_count_incomplete(self, repo):
        assert repo.count_incomplete() == 0
        tasks = [repo.create(f"t{i}", "") for i in range(3)]
        repo.mark_completed(tasks[0]["id"])
        assert repo.count_incomplete() == 2

    @pytest.mark.parametrize("raw, expected", [(4, 4), ("7", 7), (None, 0), (3.0, 3)])
    def test_count_coercion(self, raw, expected):
        repo = TaskRepository(RecordingDatabase(one={"cnt": raw}))
        assert repo.count_incomplete() == expected

    def test_count_missing_row_is_zero(self):
        assert TaskRepository(RecordingDatabase(one=None)).count_incomplete() == 0

    @pytest.mark.parametrize("raw", ["many", -1, 1.5, object()])
    def test_count_rejects_non_numeric(self, raw):
        repo = TaskRepository(RecordingDatabase(one={"cnt": raw}))
        with pytest.raises(StorageError):
            repo.count_incomplete()


class TestStorageFailures:
    def test_storage_error_surfaces(self, db, db_path):
        repo = TaskRepository(db)
        db_path.unlink()
        db_path.mkdir()
        with pytest.raises(StorageError):
            repo.count_incomplete()

    def test_ping(self, db, db_path):
        assert db.ping() is True
        db_path.unlink()
        db_path.mkdir()
        assert db.ping() is False

    @pytest.mark.parametrize("params", [(2**64,), ("a\ud800b",)])
    def test_unbindable_parameters_become_storage_error(self, db, params):
        with pytest.raises(StorageError, match="Database query failed"):
            db.fetch_one("SELECT ? AS v", params)
