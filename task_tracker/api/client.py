"""HTTP client for a running task tracker server."""

from datetime import datetime
from typing import Optional, Sequence

import httpx

from ..domain.errors import (
    DescriptionTooLongError,
    EmptyDescriptionError,
    InvalidOperationError,
    RepositoryError,
    TaskError,
    TaskNotFoundError,
    TaskValidationError,
)
from ..domain.models import MAX_DESCRIPTION_LENGTH, Task


class TaskApiClient:
    """Calls the /tasks API and returns domain tasks.

    Method names mirror TaskService so the CLI can drive either one.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_url: Server root, e.g. http://127.0.0.1:3000
            timeout: Request timeout in seconds
            transport: Optional transport for testing
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _request(
        self,
        method: str,
        path: str,
        *,
        task_id: Optional[int] = None,
        **kwargs,
    ) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, **kwargs)
            except httpx.HTTPError as e:
                raise RepositoryError(
                    f"Cannot reach task server at {self._base_url}: {e}"
                ) from e

        if response.is_error:
            raise self._error_from_response(response, task_id)
        return response

    def _error_from_response(
        self, response: httpx.Response, task_id: Optional[int]
    ) -> TaskError:
        """Rebuild the task error the server reported."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        error = body.get("error", "")
        message = body.get("message") or response.text

        if response.status_code == 404 and task_id is not None:
            return TaskNotFoundError(task_id)
        if error == "EmptyDescriptionError":
            return EmptyDescriptionError()
        if error == "DescriptionTooLongError":
            return DescriptionTooLongError(MAX_DESCRIPTION_LENGTH)
        if error == "InvalidOperationError":
            return InvalidOperationError(message.removeprefix("Invalid operation: "))
        if response.status_code in (400, 422):
            return TaskValidationError(f"Rejected by server: {message}")
        return RepositoryError(f"Server error {response.status_code}: {message}")

    @staticmethod
    def _to_task(data: dict) -> Task:
        return Task(
            id=data["id"],
            description=data["description"],
            completed=data["completed"],
            created_at=datetime.fromisoformat(data["created_at"].replace("Z", "+00:00")),
            updated_at=datetime.fromisoformat(data["updated_at"].replace("Z", "+00:00")),
        )

    def _to_tasks(self, response: httpx.Response) -> Sequence[Task]:
        return [self._to_task(item) for item in response.json()]

    async def get_all_tasks(self) -> Sequence[Task]:
        return self._to_tasks(await self._request("GET", "/tasks"))

    async def get_tasks_by_status(self, completed: bool) -> Sequence[Task]:
        params = {"completed": "true" if completed else "false"}
        return self._to_tasks(await self._request("GET", "/tasks", params=params))

    async def get_completed_tasks(self) -> Sequence[Task]:
        return self._to_tasks(await self._request("GET", "/tasks/completed"))

    async def get_pending_tasks(self) -> Sequence[Task]:
        return self._to_tasks(await self._request("GET", "/tasks/pending"))

    async def search_tasks(self, query: str) -> Sequence[Task]:
        response = await self._request("GET", "/tasks/search", params={"q": query})
        return self._to_tasks(response)

    async def get_task_by_id(self, task_id: int) -> Task:
        response = await self._request("GET", f"/tasks/{task_id}", task_id=task_id)
        return self._to_task(response.json())

    async def create_task(self, description: str) -> Task:
        response = await self._request("POST", "/tasks", json={"description": description})
        return self._to_task(response.json())

    async def update_task(
        self,
        task_id: int,
        description: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Task:
        body = {}
        if description is not None:
            body["description"] = description
        if completed is not None:
            body["completed"] = completed
        response = await self._request("PUT", f"/tasks/{task_id}", task_id=task_id, json=body)
        return self._to_task(response.json())

    async def delete_task(self, task_id: int) -> None:
        await self._request("DELETE", f"/tasks/{task_id}", task_id=task_id)

    async def complete_task(self, task_id: int) -> Task:
        response = await self._request("PUT", f"/tasks/{task_id}/complete", task_id=task_id)
        return self._to_task(response.json())

    async def uncomplete_task(self, task_id: int) -> Task:
        response = await self._request("PUT", f"/tasks/{task_id}/uncomplete", task_id=task_id)
        return self._to_task(response.json())
