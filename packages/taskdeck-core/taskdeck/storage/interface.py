"""
Abstract key-value store interface.

Taskdeck persists its state as named lists of strings. Any backend that
can get and set such lists can hold a task collection.
"""

from abc import ABC, abstractmethod

# Storage key for serialized tasks, one JSON object per entry
TASKS_KEY = "tasks"

# Storage key for category names (the "All" sentinel is never stored)
CATEGORIES_KEY = "categories"


class KeyValueStore(ABC):
    """
    Abstract base class for persistence adapters.

    Implementations must support:
    - Connection lifecycle (connect, close)
    - Reading and writing string lists by key

    Backend I/O errors are raised as PersistenceFailure.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying storage."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying storage."""
        pass

    @abstractmethod
    async def get(self, key: str) -> list[str] | None:
        """
        Read a string list.

        Args:
            key: Entry name

        Returns:
            The stored list, or None if the key was never written
        """
        pass

    @abstractmethod
    async def set(self, key: str, values: list[str]) -> bool:
        """
        Replace a string list.

        Args:
            key: Entry name
            values: Strings to store, in order

        Returns:
            True if the write was committed
        """
        pass

    @property
    def name(self) -> str:
        """Short backend name for log messages."""
        return type(self).__name__
