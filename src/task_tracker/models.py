from __future__ import annotations

from datetime import datetime
from typing import TypedDict


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A task record as stored and returned by the repository.

    Fields:
    - id: Unique integer identifier assigned by storage
    - title: Non-empty title (at most 255 chars)
    - description: Free text, empty string when not given
    - completed: Completion flag; only ever moves from False to True
    - created_at: Insert timestamp assigned by storage; newest-first ordering key
    """

    id: int
    title: str
    description: str
    completed: bool
    created_at: datetime
