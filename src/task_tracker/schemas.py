from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Request body for creating a task.

    Title rules (required, at most 255 characters) are enforced by the
    service so every caller gets the same messages; the schema only checks
    types.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Short title for the task")
    description: Optional[str] = Field(default=None, description="Optional detailed description")


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a task.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 123,
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "completed": False,
                "created_at": "2025-01-25T10:15:30.123000",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Short title for the task")
    description: str = Field(default="", description="Detailed description, empty when not given")
    completed: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., description="Creation timestamp")


# PUBLIC_INTERFACE
class TaskEnvelope(BaseModel):
    """Success envelope wrapping a single task."""

    success: bool = Field(True, description="Always true for successful responses")
    data: TaskOut


# PUBLIC_INTERFACE
class TaskListEnvelope(BaseModel):
    """Success envelope for the recent tasks window."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(True, description="Always true for successful responses")
    data: List[TaskOut] = Field(..., description="Newest incomplete tasks")
    total_count: int = Field(..., alias="totalCount", description="Number of all incomplete tasks")


# PUBLIC_INTERFACE
class ErrorEnvelope(BaseModel):
    """Envelope returned for every failed request."""

    success: bool = Field(False, description="Always false for failed responses")
    message: str = Field(..., description="Human readable error message")
