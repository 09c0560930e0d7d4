"""Protocol definitions for dependency injection."""

from typing import Protocol, Sequence, runtime_checkable

from .models import CreateTask, Task, UpdateTask


@runtime_checkable
class TaskRepository(Protocol):
    """Protocol for task storage operations.

    Implementations own the id -> task mapping and id allocation. Every
    operation is atomic with respect to the others on the same instance,
    and tasks crossing the boundary are copies.
    """

    async def get_all(self) -> Sequence[Task]:
        """Snapshot of all tasks."""
        ...

    async def get_by_id(self, task_id: int) -> Task:
        """Retrieve a single task, raising TaskNotFoundError if absent."""
        ...

    async def create(self, create_task: CreateTask) -> Task:
        """Validate, allocate an id, store and return the new task."""
        ...

    async def update(self, task_id: int, update_task: UpdateTask) -> Task:
        """Apply a partial update and return the updated task."""
        ...

    async def delete(self, task_id: int) -> None:
        """Remove a task, raising TaskNotFoundError if absent."""
        ...

    async def complete(self, task_id: int) -> Task:
        """Mark a task as completed."""
        ...

    async def uncomplete(self, task_id: int) -> Task:
        """Mark a task as pending."""
        ...
