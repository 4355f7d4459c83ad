from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from .errors import ConflictError, NotFoundError, ValidationError
from .models import TaskEntity
from .repositories import TaskRepository
from .settings import DEFAULT_RECENT_TASKS_LIMIT

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 255


def _is_encodable(text: str) -> bool:
    """False for strings holding lone surrogates, which storage cannot encode."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


@dataclass(frozen=True)
class RecentTasks:
    """
    The recent tasks window plus the count of every incomplete task.
    total_count may be larger than len(tasks).
    """
    tasks: List[TaskEntity]
    total_count: int


# PUBLIC_INTERFACE
class TaskService:
    """
    Task lifecycle rules on top of a TaskRepository.

    A task is created incomplete and may be completed exactly once; completing
    it again is a ConflictError.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repo = repository

    # PUBLIC_INTERFACE
    def create_task(self, title: Any, description: Optional[str] = None) -> TaskEntity:
        """
        Validate and store a new task.

        Raises:
            ValidationError: title missing/blank, longer than 255 characters,
                or title/description not encodable as UTF-8.
        """
        if not isinstance(title, str) or not title.strip():
            logger.info("Rejected task without title")
            raise ValidationError("Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            logger.info("Rejected task title of length %d", len(title))
            raise ValidationError("Title must be less than 255 characters")
        description = description or ""
        if not _is_encodable(title) or not _is_encodable(description):
            logger.info("Rejected task with non-encodable text")
            raise ValidationError("Title and description must be valid UTF-8 text")

        task = self._repo.create(title, description)
        logger.info("Created task id=%s", task["id"])
        return task

    # PUBLIC_INTERFACE
    def get_recent_tasks(self, limit: int = DEFAULT_RECENT_TASKS_LIMIT) -> RecentTasks:
        """Return the newest incomplete tasks and the total incomplete count."""
        tasks = self._repo.find_recent_incomplete(limit)
        total = self._repo.count_incomplete()
        return RecentTasks(tasks=tasks, total_count=total)

    # PUBLIC_INTERFACE
    def complete_task(self, task_id: int) -> TaskEntity:
        """
        Mark an incomplete task as completed.

        Raises:
            NotFoundError: no task has this id.
            ConflictError: the task is already completed.
        """
        task = self._repo.find_by_id(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        if task["completed"]:
            logger.warning("Task id=%s is already completed", task_id)
            raise ConflictError("Task is already completed")

        updated = self._repo.mark_completed(task_id)
        # Row removed between the read and the write; no delete path exists today.
        if updated is None:
            raise NotFoundError("Task not found")
        logger.info("Completed task id=%s", task_id)
        return updated
