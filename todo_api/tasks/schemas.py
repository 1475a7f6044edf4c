"""
Todo API - Task Schemas

Pydantic models for task API requests and responses.
"""

from typing import Optional

from pydantic import BaseModel, Field

from todo_api.tasks.enums import TaskPriority


class TaskWriteRequest(BaseModel):
    """
    Request model for creating or fully replacing a task.

    Any id or owner fields sent by the client are ignored.
    """

    title: str = Field(default="", description="Task title")
    description: str = Field(default="", description="Task description")
    completed: bool = Field(default=False, description="Completion flag")
    deadline: Optional[str] = Field(default=None, description="Task deadline")
    priority: str = Field(
        default=TaskPriority.MEDIUM.value,
        description="Task priority; Low, Medium and High are the usual values",
    )


class TaskResponse(BaseModel):
    """Response model for a single task."""

    id: str = Field(description="Task ID")
    owner_id: str = Field(description="Owner user ID")
    title: str = Field(description="Task title")
    description: str = Field(description="Task description")
    completed: bool = Field(description="Completion flag")
    deadline: Optional[str] = Field(default=None, description="Task deadline")
    priority: str = Field(description="Task priority")
