"""Error taxonomy shared by the domain, repository and service layers."""


class TaskError(Exception):
    """Base class for all task errors."""


class TaskNotFoundError(TaskError):
    """Requested task does not exist."""

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found with id {task_id}")


class TaskValidationError(TaskError):
    """Input fails the task domain rules."""


class EmptyDescriptionError(TaskValidationError):
    """Description is empty after trimming whitespace."""

    def __init__(self) -> None:
        super().__init__("Description cannot be empty")


class DescriptionTooLongError(TaskValidationError):
    """Description exceeds the maximum length."""

    def __init__(self, max_length: int) -> None:
        self.max_length = max_length
        super().__init__(f"Description cannot exceed {max_length} characters")


class InvalidOperationError(TaskError):
    """Structurally valid but meaningless request, e.g. an empty update."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid operation: {reason}")


class RepositoryError(TaskError):
    """Infrastructure failure inside a repository (e.g. lock timeout)."""
