"""
Todo API - Task Router

CRUD endpoints for task management.
All endpoints are JWT-protected and owner-checked.
"""

from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.database import get_session
from todo_api.auth.dependencies import CurrentUser
from todo_api.tasks.service import TaskService, TaskNotFoundError, TaskAccessDeniedError
from todo_api.tasks.repository import SqlTaskRepository, TaskRepositoryInterface
from todo_api.tasks.schemas import TaskWriteRequest, TaskResponse


router = APIRouter(prefix="/api/todos", tags=["Todos"])


async def get_task_repository(
    session: Annotated[AsyncSession, Depends(get_session)]
) -> TaskRepositoryInterface:
    """Dependency to get task repository instance."""
    return SqlTaskRepository(session)


async def get_task_service(
    repository: Annotated[TaskRepositoryInterface, Depends(get_task_repository)]
) -> TaskService:
    """Dependency to get task service instance."""
    return TaskService(repository)


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Task not found",
    )


def _forbidden() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Not authorized to access this task",
    )


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="List tasks",
)
async def list_tasks(
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> List[TaskResponse]:
    """List every task owned by the authenticated user."""
    return await service.list_tasks(current_user.id)


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a task by ID",
)
async def get_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Get a specific task by ID.

    Returns 404 if the task doesn't exist and 403 if it belongs to another user.
    """
    try:
        return await service.get_task(task_id, current_user.id)
    except TaskNotFoundError:
        raise _not_found()
    except TaskAccessDeniedError:
        raise _forbidden()


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    request: TaskWriteRequest,
    response: Response,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Create a new task for the authenticated user.

    The task is always owned by the current user.
    """
    task = await service.create_task(owner_id=current_user.id, request=request)
    response.headers["Location"] = f"{router.prefix}/{task.id}"
    return task


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Replace a task",
)
async def update_task(
    task_id: str,
    request: TaskWriteRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """
    Replace all mutable fields of a task.

    Returns 404 if the task doesn't exist and 403 if it belongs to another user.
    """
    try:
        return await service.update_task(task_id, current_user.id, request)
    except TaskNotFoundError:
        raise _not_found()
    except TaskAccessDeniedError:
        raise _forbidden()


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Response:
    """
    Delete a task by ID.

    Returns 404 if the task doesn't exist and 403 if it belongs to another user.
    """
    try:
        await service.delete_task(task_id, current_user.id)
    except TaskNotFoundError:
        raise _not_found()
    except TaskAccessDeniedError:
        raise _forbidden()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
