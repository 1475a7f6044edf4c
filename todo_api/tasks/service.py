"""
Todo API - Task Service

Business logic for task operations, including ownership enforcement.
"""

import logging
from typing import List

from todo_api.tasks.models import Task
from todo_api.tasks.repository import TaskRepositoryInterface
from todo_api.tasks.schemas import TaskWriteRequest, TaskResponse

logger = logging.getLogger(__name__)


class TaskNotFoundError(Exception):
    """Raised when no task exists with the requested id."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class TaskAccessDeniedError(Exception):
    """Raised when the caller does not own the requested task."""

    def __init__(self, task_id: str, user_id: str):
        super().__init__(f"User {user_id} does not own task {task_id}")
        self.task_id = task_id
        self.user_id = user_id


class TaskService:
    """Service layer for task business logic."""

    def __init__(self, repository: TaskRepositoryInterface):
        self.repository = repository

    @staticmethod
    def _task_to_response(task: Task) -> TaskResponse:
        return TaskResponse(
            id=task.id,
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            deadline=task.deadline,
            priority=task.priority,
        )

    async def _get_owned(self, task_id: str, owner_id: str) -> Task:
        """Load a task, checking existence before ownership."""
        task = await self.repository.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if task.owner_id != owner_id:
            logger.warning(f"[TaskService] User {owner_id} denied access to task {task_id}")
            raise TaskAccessDeniedError(task_id, owner_id)
        return task

    async def list_tasks(self, owner_id: str) -> List[TaskResponse]:
        """List all tasks owned by the caller."""
        tasks = await self.repository.list_by_owner(owner_id)
        return [self._task_to_response(task) for task in tasks]

    async def get_task(self, task_id: str, owner_id: str) -> TaskResponse:
        """Get a task by ID, enforcing ownership."""
        task = await self._get_owned(task_id, owner_id)
        return self._task_to_response(task)

    async def create_task(self, owner_id: str, request: TaskWriteRequest) -> TaskResponse:
        """Create a new task. The owner is always the caller."""
        task = Task.create(
            owner_id=owner_id,
            title=request.title,
            description=request.description,
            completed=request.completed,
            deadline=request.deadline,
            priority=request.priority,
        )
        await self.repository.create(task)
        logger.info(f"[TaskService] Created task {task.id} for user {owner_id}")
        return self._task_to_response(task)

    async def update_task(
        self,
        task_id: str,
        owner_id: str,
        request: TaskWriteRequest,
    ) -> TaskResponse:
        """Replace a task's fields. The id and owner are pinned."""
        current = await self._get_owned(task_id, owner_id)

        replacement = Task(
            id=task_id,
            owner_id=owner_id,
            title=request.title,
            description=request.description,
            completed=request.completed,
            deadline=request.deadline,
            priority=request.priority,
            created_at=current.created_at,
        )
        updated = await self.repository.update(replacement)
        if updated is None:
            # Deleted between the ownership check and the write.
            raise TaskNotFoundError(task_id)
        logger.info(f"[TaskService] Updated task {task_id}")
        return self._task_to_response(updated)

    async def delete_task(self, task_id: str, owner_id: str) -> None:
        """Delete a task, enforcing ownership."""
        await self._get_owned(task_id, owner_id)
        if not await self.repository.delete(task_id):
            raise TaskNotFoundError(task_id)
        logger.info(f"[TaskService] Deleted task {task_id}")
