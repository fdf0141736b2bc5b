"""
Core data models for Taskdeck.
"""

from taskdeck.models.task import (
    ALL_CATEGORIES,
    DEFAULT_CATEGORY,
    Task,
    TaskPriority,
    TaskStatistics,
    format_due_date,
)

__all__ = [
    "Task",
    "TaskPriority",
    "TaskStatistics",
    "format_due_date",
    "ALL_CATEGORIES",
    "DEFAULT_CATEGORY",
]
