"""
Persistence adapters: named string lists in SQLite or in memory.
"""

from taskdeck.storage.factory import create_adapter, open_adapter
from taskdeck.storage.interface import CATEGORIES_KEY, TASKS_KEY, KeyValueStore
from taskdeck.storage.memory import MemoryKeyValueStore

__all__ = [
    "KeyValueStore",
    "MemoryKeyValueStore",
    "create_adapter",
    "open_adapter",
    "TASKS_KEY",
    "CATEGORIES_KEY",
]
