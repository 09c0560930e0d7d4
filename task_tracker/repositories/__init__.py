"""Repository implementations."""

from .memory import InMemoryTaskRepository

__all__ = [
    "InMemoryTaskRepository",
]
