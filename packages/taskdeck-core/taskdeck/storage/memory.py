"""
In-process key-value store.

Nothing survives the process. Useful for tests and throwaway sessions.
"""

import logging

from taskdeck.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)


class MemoryKeyValueStore(KeyValueStore):
    """Dict-backed adapter. Lists are copied in and out."""

    def __init__(self, initial: dict[str, list[str]] | None = None):
        self._data: dict[str, list[str]] = {
            key: list(values) for key, values in (initial or {}).items()
        }

    async def connect(self) -> None:
        logger.debug("Memory store ready")

    async def close(self) -> None:
        pass

    async def get(self, key: str) -> list[str] | None:
        values = self._data.get(key)
        return list(values) if values is not None else None

    async def set(self, key: str, values: list[str]) -> bool:
        self._data[key] = list(values)
        return True

    def snapshot(self) -> dict[str, list[str]]:
        """Copy of everything stored, keyed by name."""
        return {key: list(values) for key, values in self._data.items()}
