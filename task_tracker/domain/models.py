"""Domain models for the task tracker."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from .errors import DescriptionTooLongError, EmptyDescriptionError

MAX_DESCRIPTION_LENGTH = 1000


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def validate_description(description: str) -> None:
    """Check a description against the task rules.

    The emptiness check applies to the trimmed text, the length check to
    the raw text.

    Raises:
        EmptyDescriptionError: description is blank
        DescriptionTooLongError: description is longer than the maximum
    """
    if not description.strip():
        raise EmptyDescriptionError()
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise DescriptionTooLongError(MAX_DESCRIPTION_LENGTH)


class TaskStatus(Enum):
    """Task lifecycle states."""

    PENDING = "pending"
    COMPLETED = "completed"


@dataclass
class Task:
    """Core task entity."""

    id: int
    description: str
    completed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def new(cls, id: int, description: str) -> "Task":
        """Create a pending task, validating the description."""
        now = utc_now()
        task = cls(
            id=id,
            description=description,
            completed=False,
            created_at=now,
            updated_at=now,
        )
        task.validate()
        return task

    def validate(self) -> None:
        validate_description(self.description)

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.COMPLETED if self.completed else TaskStatus.PENDING

    def is_completed(self) -> bool:
        return self.completed

    def is_pending(self) -> bool:
        return not self.completed

    def complete(self) -> None:
        """Mark as completed. Repeated calls still refresh updated_at."""
        self.completed = True
        self.updated_at = utc_now()

    def uncomplete(self) -> None:
        """Mark as pending. Repeated calls still refresh updated_at."""
        self.completed = False
        self.updated_at = utc_now()

    def update_description(self, description: str) -> None:
        """Replace the description.

        On validation failure the task is left untouched.
        """
        validate_description(description)
        self.description = description
        self.updated_at = utc_now()


@dataclass(frozen=True)
class CreateTask:
    """Input for creating a task."""

    description: str

    @classmethod
    def new(cls, description: str) -> "CreateTask":
        create_task = cls(description=description)
        create_task.validate()
        return create_task

    def validate(self) -> None:
        validate_description(self.description)


@dataclass(frozen=True)
class UpdateTask:
    """Partial update input. At least one field must be set."""

    description: Optional[str] = None
    completed: Optional[bool] = None

    @classmethod
    def new(
        cls, description: Optional[str] = None, completed: Optional[bool] = None
    ) -> "UpdateTask":
        update_task = cls(description=description, completed=completed)
        update_task.validate()
        return update_task

    def validate(self) -> None:
        if self.description is not None:
            validate_description(self.description)

    def is_empty(self) -> bool:
        return self.description is None and self.completed is None
