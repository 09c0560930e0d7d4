"""Dependency injection container."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar, Generic, Callable, Optional

from task_tracker.domain.protocols import TaskRepository
from task_tracker.services.task_service import TaskService

if TYPE_CHECKING:
    from task_tracker.api.client import TaskApiClient
    from task_tracker.config.settings import AppSettings


T = TypeVar("T")


class Provider(Generic[T]):
    """Lazy provider that creates instance on first access."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._instance: Optional[T] = None

    def get(self) -> T:
        """Get the instance, creating it if necessary."""
        if self._instance is None:
            self._instance = self._factory()
        return self._instance

    def reset(self) -> None:
        """Reset the instance (for testing)."""
        self._instance = None

    def override(self, instance: T) -> None:
        """Override with a specific instance (for testing)."""
        self._instance = instance


@dataclass
class Container:
    """Dependency injection container."""

    _task_repository: Optional[Provider[TaskRepository]] = None
    _api_client: Optional[Provider["TaskApiClient"]] = None

    # Settings cache
    _settings: Optional["AppSettings"] = None

    @property
    def is_configured(self) -> bool:
        return self._task_repository is not None

    @property
    def task_repository(self) -> TaskRepository:
        """Get the task repository."""
        if self._task_repository is None:
            raise RuntimeError("Task repository not configured")
        return self._task_repository.get()

    @property
    def task_service(self) -> TaskService:
        """Get a TaskService bound to the configured repository."""
        return TaskService(self.task_repository)

    @property
    def api_client(self) -> "TaskApiClient":
        """Get the client for a running task server."""
        if self._api_client is None:
            raise RuntimeError("API client not configured")
        return self._api_client.get()

    @property
    def settings(self) -> "AppSettings":
        """Get application settings."""
        if self._settings is None:
            from task_tracker.config.settings import get_settings

            self._settings = get_settings()
        return self._settings

    def configure_task_repository(
        self, factory: Callable[[], TaskRepository]
    ) -> "Container":
        """Configure the task repository."""
        self._task_repository = Provider(factory)
        return self

    def configure_api_client(
        self, factory: Callable[[], "TaskApiClient"]
    ) -> "Container":
        """Configure the server API client."""
        self._api_client = Provider(factory)
        return self

    def reset(self) -> None:
        """Reset all providers (for testing)."""
        if self._task_repository:
            self._task_repository.reset()
        if self._api_client:
            self._api_client.reset()
        self._settings = None


# Global container instance
container = Container()


def get_container() -> Container:
    """Get the global container instance."""
    return container


def reset_container() -> None:
    """Reset the global container (for testing)."""
    global container
    container.reset()
    container = Container()


def configure_default_container() -> Container:
    """Wire an in-memory repository from settings unless already configured."""
    from task_tracker.repositories.memory import InMemoryTaskRepository

    current = get_container()
    if current.is_configured:
        return current

    lock_timeout = current.settings.lock_timeout
    current.configure_task_repository(
        lambda: InMemoryTaskRepository(lock_timeout=lock_timeout)
    )
    return current


def configure_default_api_client() -> Container:
    """Point the API client at the server from settings unless already configured."""
    from task_tracker.api.client import TaskApiClient

    current = get_container()
    if current._api_client is not None:
        return current

    settings = current.settings
    current.configure_api_client(
        lambda: TaskApiClient(
            settings.get_server_url(), timeout=settings.client_timeout
        )
    )
    return current
