from __future__ import annotations

from typing import Optional


# PUBLIC_INTERFACE
class TaskTrackerError(Exception):
    """
    Base class for errors raised by the task core.

    Every subclass carries the HTTP status code the request handler answers
    with, so the boundary mapping lives next to the error definition.
    """

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# PUBLIC_INTERFACE
class ValidationError(TaskTrackerError):
    """Bad, user-correctable input."""

    status_code = 400
    default_message = "Invalid input"


# PUBLIC_INTERFACE
class NotFoundError(TaskTrackerError):
    """The referenced task does not exist."""

    status_code = 404
    default_message = "Task not found"


# PUBLIC_INTERFACE
class ConflictError(TaskTrackerError):
    """The requested state is already in effect."""

    status_code = 400
    default_message = "Task is already completed"


# PUBLIC_INTERFACE
class StorageError(TaskTrackerError):
    """The storage collaborator was unreachable or rejected a query."""

    status_code = 500
    default_message = "Storage failure"


# PUBLIC_INTERFACE
class InvalidArgument(TaskTrackerError):
    """An internal caller passed an argument the repository refuses to use."""

    status_code = 500
