"""
Pytest configuration and fixtures for taskdeck tests.
"""

import pytest
import sys
from pathlib import Path

# Add packages to path for testing
packages_dir = Path(__file__).parent.parent / "packages"
sys.path.insert(0, str(packages_dir / "taskdeck-core"))


@pytest.fixture
def memory_adapter():
    """An empty in-memory key-value store."""
    from taskdeck.storage.memory import MemoryKeyValueStore

    return MemoryKeyValueStore()


@pytest.fixture
async def store(memory_adapter):
    """A TaskStore over an empty in-memory adapter."""
    from taskdeck.services.tasks import TaskStore

    task_store = TaskStore(memory_adapter)
    yield task_store
    await task_store.close()


@pytest.fixture
def sample_task_data():
    """Sample task record as stored."""
    return {
        "id": "5f0c6a52-8d7e-4d6b-9c1a-2f7b3e4d5a61",
        "title": "Buy milk",
        "isCompleted": False,
        "priority": "high",
        "dueDate": "2024-05-01",
        "category": "Home",
    }
