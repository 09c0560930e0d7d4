"""Domain models, errors and protocols."""

from .errors import (
    TaskError,
    TaskNotFoundError,
    TaskValidationError,
    EmptyDescriptionError,
    DescriptionTooLongError,
    InvalidOperationError,
    RepositoryError,
)
from .models import (
    MAX_DESCRIPTION_LENGTH,
    Task,
    TaskStatus,
    CreateTask,
    UpdateTask,
)
from .protocols import TaskRepository

__all__ = [
    "TaskError",
    "TaskNotFoundError",
    "TaskValidationError",
    "EmptyDescriptionError",
    "DescriptionTooLongError",
    "InvalidOperationError",
    "RepositoryError",
    "MAX_DESCRIPTION_LENGTH",
    "Task",
    "TaskStatus",
    "CreateTask",
    "UpdateTask",
    "TaskRepository",
]
