"""
Todo API - Task Models

Internal task model for database operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import uuid

from todo_api.database import TodoRecord
from todo_api.tasks.enums import TaskPriority


def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """Task entity for database storage."""

    id: str
    owner_id: str
    title: str
    description: str = ""
    completed: bool = False
    deadline: Optional[str] = None
    priority: str = TaskPriority.MEDIUM.value
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        # Priority is free-form text; enum members are stored by value.
        if isinstance(self.priority, TaskPriority):
            self.priority = self.priority.value

    @classmethod
    def create(
        cls,
        owner_id: str,
        title: str,
        description: str = "",
        completed: bool = False,
        deadline: Optional[str] = None,
        priority: str = TaskPriority.MEDIUM.value,
    ) -> "Task":
        """Create a new task with generated ID."""
        return cls(
            id=str(uuid.uuid4()),
            owner_id=owner_id,
            title=title,
            description=description,
            completed=completed,
            deadline=deadline,
            priority=priority,
            created_at=_utcnow(),
        )

    def to_record(self) -> TodoRecord:
        """Convert task to a row for the todos table."""
        return TodoRecord(
            id=self.id,
            owner_id=self.owner_id,
            title=self.title,
            description=self.description,
            completed=self.completed,
            deadline=self.deadline,
            priority=self.priority,
            created_at=self.created_at,
        )

    @classmethod
    def from_record(cls, record: TodoRecord) -> "Task":
        """Create task from a todos table row."""
        return cls(
            id=record.id,
            owner_id=record.owner_id,
            title=record.title,
            description=record.description or "",
            completed=bool(record.completed),
            deadline=record.deadline,
            priority=record.priority,
            created_at=record.created_at,
        )
