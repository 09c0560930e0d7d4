"""In-memory implementation of the task repository."""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from typing import AsyncIterator, Sequence

from task_tracker.domain.errors import (
    InvalidOperationError,
    RepositoryError,
    TaskNotFoundError,
)
from task_tracker.domain.models import CreateTask, Task, UpdateTask

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0


class InMemoryTaskRepository:
    """In-memory implementation of TaskRepository.

    A single asyncio.Lock serializes every operation, so readers never see
    a half-applied create or update. Stored tasks never leave the store;
    callers always get copies.
    """

    def __init__(self, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
        if lock_timeout <= 0:
            raise ValueError("lock_timeout must be positive")
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()
        self._lock_timeout = lock_timeout

    @asynccontextmanager
    async def _locked(self) -> AsyncIterator[None]:
        """Hold the store lock, failing with RepositoryError on timeout."""
        acquire = asyncio.ensure_future(self._lock.acquire())
        try:
            done, _ = await asyncio.wait({acquire}, timeout=self._lock_timeout)
        except asyncio.CancelledError:
            self._abandon_acquire(acquire)
            raise
        if not done:
            self._abandon_acquire(acquire)
            logger.error(f"Failed to acquire store lock within {self._lock_timeout}s")
            raise RepositoryError(
                f"Failed to acquire lock within {self._lock_timeout} seconds"
            )
        acquire.result()
        try:
            yield
        finally:
            self._lock.release()

    def _abandon_acquire(self, acquire: "asyncio.Future[bool]") -> None:
        """Cancel a pending acquire; release the lock if it was obtained anyway."""

        def release_if_acquired(fut: "asyncio.Future[bool]") -> None:
            if not fut.cancelled() and fut.exception() is None and fut.result():
                self._lock.release()

        acquire.cancel()
        acquire.add_done_callback(release_if_acquired)

    def _get_or_raise(self, task_id: int) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def get_all(self) -> Sequence[Task]:
        """Snapshot of all tasks."""
        async with self._locked():
            return [replace(t) for t in self._tasks.values()]

    async def get_by_id(self, task_id: int) -> Task:
        """Retrieve a single task by ID."""
        async with self._locked():
            return replace(self._get_or_raise(task_id))

    async def create(self, create_task: CreateTask) -> Task:
        """Create a new task with the next free id."""
        create_task.validate()

        async with self._locked():
            task = Task.new(self._next_id, create_task.description)
            self._tasks[task.id] = task
            self._next_id += 1
            logger.debug(f"Allocated task id {task.id}")
            return replace(task)

    async def update(self, task_id: int, update_task: UpdateTask) -> Task:
        """Apply a partial update: description first, then completed."""
        if update_task.is_empty():
            raise InvalidOperationError("Update task cannot be empty")
        update_task.validate()

        async with self._locked():
            # Work on a copy so a failure leaves the stored task untouched
            task = replace(self._get_or_raise(task_id))

            if update_task.description is not None:
                task.update_description(update_task.description)

            if update_task.completed is not None:
                if update_task.completed:
                    task.complete()
                else:
                    task.uncomplete()

            self._tasks[task_id] = task
            return replace(task)

    async def delete(self, task_id: int) -> None:
        """Delete a task."""
        async with self._locked():
            if self._tasks.pop(task_id, None) is None:
                raise TaskNotFoundError(task_id)
            logger.debug(f"Deleted task {task_id}")

    async def complete(self, task_id: int) -> Task:
        """Mark a task as completed."""
        async with self._locked():
            task = replace(self._get_or_raise(task_id))
            task.complete()
            self._tasks[task_id] = task
            return replace(task)

    async def uncomplete(self, task_id: int) -> Task:
        """Mark a task as pending."""
        async with self._locked():
            task = replace(self._get_or_raise(task_id))
            task.uncomplete()
            self._tasks[task_id] = task
            return replace(task)

    async def count(self) -> int:
        """Number of stored tasks."""
        async with self._locked():
            return len(self._tasks)

    async def clear(self) -> None:
        """Remove all tasks. Ids are still never reused."""
        async with self._locked():
            self._tasks.clear()
