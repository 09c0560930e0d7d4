"""Task use-case service."""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from task_tracker.domain.errors import RepositoryError, TaskError
from task_tracker.domain.models import CreateTask, Task, UpdateTask
from task_tracker.domain.protocols import TaskRepository

logger = logging.getLogger(__name__)


@contextmanager
def _repository_errors(operation: str) -> Iterator[None]:
    """Let task errors through and wrap anything else as RepositoryError."""
    try:
        yield
    except TaskError:
        raise
    except Exception as e:
        logger.error(f"Repository failure during {operation}: {e}")
        raise RepositoryError(f"{operation} failed: {e}") from e


class TaskService:
    """Task use-cases on top of a task repository.

    The repository is injected so any TaskRepository implementation (or a
    test double) can back the service.
    """

    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    async def get_all_tasks(self) -> Sequence[Task]:
        with _repository_errors("get_all_tasks"):
            return await self._repository.get_all()

    async def get_task_by_id(self, task_id: int) -> Task:
        with _repository_errors("get_task_by_id"):
            return await self._repository.get_by_id(task_id)

    async def create_task(self, description: str) -> Task:
        """Create a task from a description."""
        create_task = CreateTask.new(description)
        with _repository_errors("create_task"):
            task = await self._repository.create(create_task)
        logger.info(f"Created task {task.id}")
        return task

    async def update_task(
        self,
        task_id: int,
        description: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Task:
        """Apply a partial update.

        Raises:
            TaskValidationError: description breaks the task rules
            InvalidOperationError: neither field is set
            TaskNotFoundError: no task with this id
        """
        update_task = UpdateTask.new(description=description, completed=completed)
        with _repository_errors("update_task"):
            task = await self._repository.update(task_id, update_task)
        logger.info(f"Updated task {task_id}")
        return task

    async def delete_task(self, task_id: int) -> None:
        """Delete a task after checking that it exists.

        The check and the delete are separate store calls. A concurrent
        delete in between surfaces as TaskNotFoundError from the second one.
        """
        with _repository_errors("delete_task"):
            await self._repository.get_by_id(task_id)
            await self._repository.delete(task_id)
        logger.info(f"Deleted task {task_id}")

    async def complete_task(self, task_id: int) -> Task:
        with _repository_errors("complete_task"):
            task = await self._repository.complete(task_id)
        logger.info(f"Completed task {task_id}")
        return task

    async def uncomplete_task(self, task_id: int) -> Task:
        with _repository_errors("uncomplete_task"):
            task = await self._repository.uncomplete(task_id)
        logger.info(f"Reopened task {task_id}")
        return task

    async def get_tasks_by_status(self, completed: bool) -> Sequence[Task]:
        """Tasks whose completed flag matches, from one snapshot."""
        all_tasks = await self.get_all_tasks()
        return [t for t in all_tasks if t.completed == completed]

    async def get_completed_tasks(self) -> Sequence[Task]:
        return await self.get_tasks_by_status(True)

    async def get_pending_tasks(self) -> Sequence[Task]:
        return await self.get_tasks_by_status(False)

    async def search_tasks(self, query: str) -> Sequence[Task]:
        """Case-insensitive substring search over descriptions."""
        needle = query.lower()
        all_tasks = await self.get_all_tasks()
        return [t for t in all_tasks if needle in t.description.lower()]
