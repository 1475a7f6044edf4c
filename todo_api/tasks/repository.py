"""
Todo API - Task Repository

Repository pattern for task data access.
Includes the SQLite implementation for runtime and an in-memory one for tests.
"""

from abc import ABC, abstractmethod
from typing import Optional, List

from sqlalchemy import literal_column, select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import TodoRecord
from todo_api.tasks.models import Task


class TaskRepositoryInterface(ABC):
    """
    Abstract interface for task repository.

    Lookups by id are not owner-scoped; the service compares owners so it can
    tell a missing task apart from someone else's task.
    """

    @abstractmethod
    async def create(self, task: Task) -> Task:
        pass

    @abstractmethod
    async def get_by_id(self, task_id: str) -> Optional[Task]:
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[Task]:
        """List tasks for owner in insertion order."""
        pass

    @abstractmethod
    async def update(self, task: Task) -> Optional[Task]:
        """Replace every mutable field of the stored task. None if absent."""
        pass

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        pass


class SqlTaskRepository(TaskRepositoryInterface):
    """SQLAlchemy implementation of the task repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, task: Task) -> Task:
        self.session.add(task.to_record())
        await self.session.commit()
        return task

    async def get_by_id(self, task_id: str) -> Optional[Task]:
        record = await self.session.get(TodoRecord, task_id)
        if record is None:
            return None
        return Task.from_record(record)

    async def list_by_owner(self, owner_id: str) -> List[Task]:
        result = await self.session.execute(
            select(TodoRecord)
            .where(TodoRecord.owner_id == owner_id)
            # rowid breaks ties between rows written within the same clock tick
            .order_by(TodoRecord.created_at, literal_column("todos.rowid"))
        )
        return [Task.from_record(record) for record in result.scalars()]

    async def update(self, task: Task) -> Optional[Task]:
        record = await self.session.get(TodoRecord, task.id)
        if record is None:
            return None

        record.title = task.title
        record.description = task.description
        record.completed = task.completed
        record.deadline = task.deadline
        record.priority = task.priority
        record.owner_id = task.owner_id
        await self.session.commit()
        return Task.from_record(record)

    async def delete(self, task_id: str) -> bool:
        record = await self.session.get(TodoRecord, task_id)
        if record is None:
            return False
        await self.session.delete(record)
        await self.session.commit()
        return True


class InMemoryTaskRepository(TaskRepositoryInterface):
    """
    In-memory implementation for CI-safe testing.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}

    def clear(self) -> None:
        self._tasks.clear()

    async def create(self, task: Task) -> Task:
        self._tasks[task.id] = task
        return task

    async def get_by_id(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    async def list_by_owner(self, owner_id: str) -> List[Task]:
        return [task for task in self._tasks.values() if task.owner_id == owner_id]

    async def update(self, task: Task) -> Optional[Task]:
        existing = self._tasks.get(task.id)
        if existing is None:
            return None

        existing.title = task.title
        existing.description = task.description
        existing.completed = task.completed
        existing.deadline = task.deadline
        existing.priority = task.priority
        existing.owner_id = task.owner_id
        return existing

    async def delete(self, task_id: str) -> bool:
        if task_id not in self._tasks:
            return False
        del self._tasks[task_id]
        return True
