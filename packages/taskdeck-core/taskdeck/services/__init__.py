"""
Business logic services for Taskdeck.
"""

from taskdeck.services.tasks import TaskStore

__all__ = [
    "TaskStore",
]
