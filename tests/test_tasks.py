"""
Todo API - Task CRUD Tests

HTTP-level tests for owner-scoped task management, plus service tests
against the in-memory repository.
"""

import pytest

from todo_api.tasks.enums import TaskPriority
from todo_api.tasks.repository import InMemoryTaskRepository
from todo_api.tasks.schemas import TaskWriteRequest
from todo_api.tasks.service import TaskAccessDeniedError, TaskNotFoundError, TaskService


@pytest.fixture
def created_task(client, auth_headers):
    """A task owned by the first user."""
    response = client.post(
        "/api/todos",
        json={"title": "Owned task", "description": "mine"},
        headers=auth_headers,
    )
    return response.json()


class TestCreateTask:
    """Tests for POST /api/todos."""

    def test_create_task_minimal(self, client, auth_headers, registered_user):
        """Create task with only required fields."""
        response = client.post("/api/todos", json={"title": "Test Task"}, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == "Test Task"
        assert data["description"] == ""
        assert data["completed"] is False
        assert data["deadline"] is None
        assert data["priority"] == "Medium"
        assert data["owner_id"] == registered_user["id"]
        assert data["id"]

    def test_create_sets_location(self, client, auth_headers):
        response = client.post("/api/todos", json={"title": "Located"}, headers=auth_headers)
        assert response.headers["Location"] == f"/api/todos/{response.json()['id']}"

    def test_create_task_all_fields(self, client, auth_headers):
        response = client.post(
            "/api/todos",
            json={
                "title": "Full Task",
                "description": "A detailed description",
                "completed": True,
                "deadline": "2025-06-01",
                "priority": "Low",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["description"] == "A detailed description"
        assert data["completed"] is True
        assert data["deadline"] == "2025-06-01"
        assert data["priority"] == "Low"

    def test_owner_in_body_is_ignored(self, client, auth_headers, registered_user, second_user):
        """The caller always owns what they create."""
        response = client.post(
            "/api/todos",
            json={
                "title": "Sneaky",
                "owner_id": second_user["id"],
                "userId": second_user["id"],
                "id": "chosen-by-client",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()
        assert data["owner_id"] == registered_user["id"]
        assert data["id"] != "chosen-by-client"

    def test_create_task_requires_auth(self, client):
        response = client.post("/api/todos", json={"title": "Unauthorized"})
        assert response.status_code == 401

    def test_create_task_unlisted_priority_kept(self, client, auth_headers):
        response = client.post(
            "/api/todos",
            json={"title": "Hot", "priority": "Urgent"},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["priority"] == "Urgent"

        fetched = client.get(f"/api/todos/{response.json()['id']}", headers=auth_headers)
        assert fetched.json()["priority"] == "Urgent"

    def test_create_task_empty_body_uses_defaults(self, client, auth_headers):
        response = client.post("/api/todos", json={}, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["title"] == ""
        assert data["description"] == ""
        assert data["completed"] is False
        assert data["deadline"] is None
        assert data["priority"] == "Medium"


class TestListTasks:
    """Tests for GET /api/todos."""

    def test_list_empty(self, client, auth_headers):
        response = client.get("/api/todos", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_list_only_own_tasks(self, client, auth_headers, second_auth_headers):
        client.post("/api/todos", json={"title": "A1"}, headers=auth_headers)
        client.post("/api/todos", json={"title": "A2"}, headers=auth_headers)
        client.post("/api/todos", json={"title": "B1"}, headers=second_auth_headers)

        mine = client.get("/api/todos", headers=auth_headers).json()
        theirs = client.get("/api/todos", headers=second_auth_headers).json()
        assert [t["title"] for t in mine] == ["A1", "A2"]
        assert [t["title"] for t in theirs] == ["B1"]


class TestGetTask:
    """Tests for GET /api/todos/{id}."""

    def test_round_trip(self, client, auth_headers, registered_user):
        created = client.post(
            "/api/todos",
            json={"title": "Buy milk", "priority": "High"},
            headers=auth_headers,
        ).json()

        response = client.get(f"/api/todos/{created['id']}", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data == created
        assert data["title"] == "Buy milk"
        assert data["priority"] == "High"
        assert data["owner_id"] == registered_user["id"]

    def test_get_missing(self, client, auth_headers):
        response = client.get("/api/todos/does-not-exist", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Task not found"

    def test_get_other_users_task(self, client, created_task, second_auth_headers):
        response = client.get(f"/api/todos/{created_task['id']}", headers=second_auth_headers)
        assert response.status_code == 403

    def test_get_without_token(self, client, created_task):
        response = client.get(f"/api/todos/{created_task['id']}")
        assert response.status_code == 401


class TestUpdateTask:
    """Tests for PUT /api/todos/{id}."""

    def test_full_replace(self, client, auth_headers, created_task, registered_user):
        response = client.put(
            f"/api/todos/{created_task['id']}",
            json={"title": "Replaced", "completed": True, "priority": "High", "deadline": "tomorrow"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == created_task["id"]
        assert data["owner_id"] == registered_user["id"]
        assert data["title"] == "Replaced"
        assert data["completed"] is True
        assert data["priority"] == "High"
        assert data["deadline"] == "tomorrow"
        # Omitted fields fall back to defaults rather than keeping old values
        assert data["description"] == ""

        fetched = client.get(f"/api/todos/{created_task['id']}", headers=auth_headers).json()
        assert fetched == data

    def test_toggle_completed_back(self, client, auth_headers, created_task):
        url = f"/api/todos/{created_task['id']}"
        client.put(url, json={"title": "T", "completed": True}, headers=auth_headers)
        response = client.put(url, json={"title": "T", "completed": False}, headers=auth_headers)
        assert response.json()["completed"] is False

    def test_id_and_owner_are_pinned(self, client, auth_headers, created_task, registered_user, second_user):
        response = client.put(
            f"/api/todos/{created_task['id']}",
            json={"title": "Pinned", "id": "other-id", "owner_id": second_user["id"]},
            headers=auth_headers,
        )
        data = response.json()
        assert data["id"] == created_task["id"]
        assert data["owner_id"] == registered_user["id"]

    def test_update_missing(self, client, auth_headers):
        response = client.put("/api/todos/does-not-exist", json={"title": "X"}, headers=auth_headers)
        assert response.status_code == 404

    def test_update_other_users_task(self, client, auth_headers, created_task, second_auth_headers):
        response = client.put(
            f"/api/todos/{created_task['id']}",
            json={"title": "Hijacked"},
            headers=second_auth_headers,
        )
        assert response.status_code == 403
        unchanged = client.get(f"/api/todos/{created_task['id']}", headers=auth_headers).json()
        assert unchanged["title"] == "Owned task"

    def test_update_without_token(self, client, created_task):
        response = client.put(f"/api/todos/{created_task['id']}", json={"title": "X"})
        assert response.status_code == 401


class TestDeleteTask:
    """Tests for DELETE /api/todos/{id}."""

    def test_delete(self, client, auth_headers, created_task):
        response = client.delete(f"/api/todos/{created_task['id']}", headers=auth_headers)
        assert response.status_code == 204
        assert response.content == b""
        assert client.get(f"/api/todos/{created_task['id']}", headers=auth_headers).status_code == 404

    def test_delete_missing(self, client, auth_headers):
        response = client.delete("/api/todos/does-not-exist", headers=auth_headers)
        assert response.status_code == 404

    def test_delete_other_users_task(self, client, auth_headers, created_task, second_auth_headers):
        response = client.delete(f"/api/todos/{created_task['id']}", headers=second_auth_headers)
        assert response.status_code == 403
        assert client.get(f"/api/todos/{created_task['id']}", headers=auth_headers).status_code == 200

    def test_delete_without_token(self, client, created_task):
        response = client.delete(f"/api/todos/{created_task['id']}")
        assert response.status_code == 401


class TestTaskService:
    """Ownership rules at the service layer."""

    @pytest.fixture
    def service(self):
        return TaskService(InMemoryTaskRepository())

    @pytest.mark.asyncio
    async def test_not_found_checked_before_ownership(self, service):
        with pytest.raises(TaskNotFoundError):
            await service.get_task("missing", "anyone")
        with pytest.raises(TaskNotFoundError):
            await service.update_task("missing", "anyone", TaskWriteRequest(title="x"))
        with pytest.raises(TaskNotFoundError):
            await service.delete_task("missing", "anyone")

    @pytest.mark.asyncio
    async def test_access_denied_for_other_owner(self, service):
        task = await service.create_task("alice", TaskWriteRequest(title="Alice's"))
        with pytest.raises(TaskAccessDeniedError):
            await service.get_task(task.id, "bob")
        with pytest.raises(TaskAccessDeniedError):
            await service.update_task(task.id, "bob", TaskWriteRequest(title="Bob's now"))
        with pytest.raises(TaskAccessDeniedError):
            await service.delete_task(task.id, "bob")
        assert (await service.get_task(task.id, "alice")).title == "Alice's"

    @pytest.mark.asyncio
    async def test_create_defaults(self, service):
        task = await service.create_task("alice", TaskWriteRequest(title="Defaults"))
        assert task.priority == TaskPriority.MEDIUM
        assert task.completed is False
        assert task.owner_id == "alice"
        assert [t.id for t in await service.list_tasks("alice")] == [task.id]
        assert await service.list_tasks("bob") == []
