"""
Taskdeck Core Library

Local task management: tasks, categories, filtered views and statistics,
persisted to SQLite.
"""

__version__ = "0.1.0"

from taskdeck.app import close_task_store, open_task_store
from taskdeck.config import TaskdeckConfig, load_config
from taskdeck.errors import DataCorruption, PersistenceFailure, TaskdeckError
from taskdeck.models import Task, TaskPriority, TaskStatistics
from taskdeck.services import TaskStore
from taskdeck.storage import KeyValueStore, create_adapter

__all__ = [
    "load_config",
    "TaskdeckConfig",
    "open_task_store",
    "close_task_store",
    "TaskStore",
    "Task",
    "TaskPriority",
    "TaskStatistics",
    "KeyValueStore",
    "create_adapter",
    "TaskdeckError",
    "DataCorruption",
    "PersistenceFailure",
]
