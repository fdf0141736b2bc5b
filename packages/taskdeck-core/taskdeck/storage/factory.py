"""
Storage adapter factory.

Creates the appropriate key-value store based on configuration.
"""

import logging

from taskdeck.storage.interface import KeyValueStore

logger = logging.getLogger(__name__)


def create_adapter(config=None) -> KeyValueStore:
    """
    Create a key-value store for the configured backend.

    A new adapter is returned on every call; the caller owns it.

    Args:
        config: Optional TaskdeckConfig. If not provided, loads from default location.

    Returns:
        KeyValueStore instance (SQLiteKeyValueStore or MemoryKeyValueStore)

    Raises:
        ValueError: If the storage type is unknown
    """
    if config is None:
        from taskdeck.config import load_config
        config = load_config()

    store_type = config.storage.type.lower()

    if store_type == "sqlite":
        from taskdeck.storage.sqlite import SQLiteKeyValueStore

        path = config.storage.sqlite_path
        logger.info(f"Using SQLite store: {path}")
        return SQLiteKeyValueStore(path)

    if store_type == "memory":
        from taskdeck.storage.memory import MemoryKeyValueStore

        logger.info("Using in-memory store (nothing will be saved to disk)")
        return MemoryKeyValueStore()

    raise ValueError(
        f"Unknown storage type: {store_type}. "
        "Use 'sqlite' or 'memory'."
    )


async def open_adapter(config=None) -> KeyValueStore:
    """
    Create the configured adapter and connect it.

    Args:
        config: Optional TaskdeckConfig

    Returns:
        Connected KeyValueStore instance
    """
    adapter = create_adapter(config)
    await adapter.connect()
    return adapter
