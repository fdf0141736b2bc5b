"""
Application lifecycle for Taskdeck.

The presentation layer gets its TaskStore from open_task_store() at startup
and hands it back to close_task_store() on shutdown.
"""

import logging

from taskdeck.services.tasks import TaskStore
from taskdeck.storage.factory import open_adapter
from taskdeck.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)


async def open_task_store(config=None, adapter: KeyValueStore | None = None) -> TaskStore:
    """
    Connect storage, build a TaskStore and load saved state into it.

    Args:
        config: Optional TaskdeckConfig. Ignored when an adapter is given.
        adapter: Optional already-connected KeyValueStore

    Returns:
        A loaded TaskStore
    """
    if adapter is None:
        adapter = await open_adapter(config)

    store = TaskStore(adapter)
    await store.start()
    return store


async def close_task_store(store: TaskStore) -> None:
    """
    Flush pending saves, drop listeners and close the store's adapter.

    Args:
        store: TaskStore returned by open_task_store()
    """
    await store.close()
    await store.adapter.close()
    logger.info("Task store shut down")
