"""Tests for dependency injection container."""

import pytest

from task_tracker.api.client import TaskApiClient
from task_tracker.config.settings import AppSettings, clear_settings_cache
from task_tracker.container import (
    Container,
    Provider,
    configure_default_api_client,
    configure_default_container,
    get_container,
    reset_container,
)
from task_tracker.repositories.memory import InMemoryTaskRepository
from task_tracker.services.task_service import TaskService


class TestProvider:
    """Tests for Provider class."""

    def test_lazy_initialization(self):
        """Should not call factory until get() is called."""
        call_count = 0

        def factory():
            nonlocal call_count
            call_count += 1
            return InMemoryTaskRepository()

        provider = Provider(factory)
        assert call_count == 0

        provider.get()
        assert call_count == 1

        # Should use cached instance
        provider.get()
        assert call_count == 1

    def test_reset_clears_instance(self):
        provider = Provider(InMemoryTaskRepository)

        instance1 = provider.get()
        provider.reset()
        instance2 = provider.get()

        assert instance1 is not instance2

    def test_override(self):
        provider = Provider(InMemoryTaskRepository)
        override_instance = InMemoryTaskRepository()

        provider.override(override_instance)

        assert provider.get() is override_instance


class TestContainer:
    """Tests for Container class."""

    @pytest.fixture
    def container(self) -> Container:
        return Container()

    def test_unconfigured_repository_raises(self, container):
        assert not container.is_configured
        with pytest.raises(RuntimeError, match="not configured"):
            _ = container.task_repository

    def test_configure_task_repository(self, container):
        container.configure_task_repository(InMemoryTaskRepository)

        assert container.is_configured
        assert isinstance(container.task_repository, InMemoryTaskRepository)
        assert container.task_repository is container.task_repository

    @pytest.mark.asyncio
    async def test_task_services_share_repository(self, container):
        container.configure_task_repository(InMemoryTaskRepository)

        first = container.task_service
        second = container.task_service
        created = await first.create_task("Shared")

        assert isinstance(first, TaskService)
        assert (await second.get_task_by_id(created.id)).description == "Shared"

    def test_reset_recreates_repository(self, container):
        container.configure_task_repository(InMemoryTaskRepository)
        repo1 = container.task_repository

        container.reset()

        assert container.task_repository is not repo1


class TestGlobalContainer:
    """Tests for the module-level container helpers."""

    @pytest.fixture(autouse=True)
    def clean_container(self, monkeypatch):
        monkeypatch.setenv("TASK_TRACKER_LOCK_TIMEOUT", "1.5")
        clear_settings_cache()
        reset_container()
        yield
        reset_container()
        clear_settings_cache()

    def test_reset_container_returns_fresh_instance(self):
        before = get_container()
        reset_container()
        assert get_container() is not before

    def test_configure_default_container_uses_settings(self):
        container = configure_default_container()

        repository = container.task_repository
        assert isinstance(repository, InMemoryTaskRepository)
        assert repository._lock_timeout == 1.5

    def test_configure_default_container_keeps_existing(self):
        custom = InMemoryTaskRepository()
        get_container().configure_task_repository(lambda: custom)

        container = configure_default_container()

        assert container.task_repository is custom

    def test_settings_are_app_settings(self):
        settings = get_container().settings

        assert isinstance(settings, AppSettings)
        assert settings.lock_timeout == 1.5
        assert get_container().settings is settings

    def test_unconfigured_api_client_raises(self):
        with pytest.raises(RuntimeError, match="API client not configured"):
            _ = get_container().api_client

    def test_configure_default_api_client_uses_settings(self, monkeypatch):
        monkeypatch.setenv("TASK_TRACKER_PORT", "8123")
        clear_settings_cache()

        client = configure_default_api_client().api_client

        assert isinstance(client, TaskApiClient)
        assert client.base_url == "http://127.0.0.1:8123"

    def test_configure_default_api_client_keeps_existing(self):
        custom = TaskApiClient("http://tasks.test")
        get_container().configure_api_client(lambda: custom)

        assert configure_default_api_client().api_client is custom
