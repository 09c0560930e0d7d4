"""Shared pytest fixtures."""

import pytest

from task_tracker.domain.models import Task
from task_tracker.repositories.memory import InMemoryTaskRepository
from task_tracker.services.task_service import TaskService


@pytest.fixture
def sample_task() -> Task:
    """Create a sample task for testing."""
    return Task.new(1, "Test task")


@pytest.fixture
def repository() -> InMemoryTaskRepository:
    """Create a fresh repository for each test."""
    return InMemoryTaskRepository()


@pytest.fixture
def service(repository) -> TaskService:
    return TaskService(repository)
