"""
Error types raised by Taskdeck.

Only persistence-related failures get their own classes. Unknown task ids
are not errors: the store treats them as silent no-ops.
"""


class TaskdeckError(Exception):
    """Base class for Taskdeck errors."""

    pass


class DataCorruption(TaskdeckError):
    """A persisted record could not be deserialized."""

    pass


class PersistenceFailure(TaskdeckError):
    """The key-value store failed to read or write."""

    pass
