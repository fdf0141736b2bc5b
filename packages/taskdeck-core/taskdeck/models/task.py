"""
Task model for Taskdeck.

Tasks are the user-visible work items: a title, a completion flag, a
priority, an optional due date and a category.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from taskdeck.errors import DataCorruption

# Category every task belongs to unless told otherwise
DEFAULT_CATEGORY = "Default"

# Filter sentinel meaning "no category filter"; never a real task category
ALL_CATEGORIES = "All"

REQUIRED_FIELDS = ("id", "title", "isCompleted", "priority", "category")


class TaskPriority(Enum):
    """Task priority, declared lowest first."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Any) -> "TaskPriority":
        """
        Coerce a stored or user-supplied value to a priority.

        Accepts a member, a name such as "high" (any case) or a legacy
        ordinal (0, 1, 2).

        Raises:
            ValueError: If the value matches no priority
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid priority: {value!r}")
        if isinstance(value, int):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
            raise ValueError(f"Priority ordinal out of range: {value}")
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(
            f"Invalid priority {value!r}. Must be one of: "
            f"{', '.join(p.value for p in cls)}"
        )


def format_due_date(value: date) -> str:
    """Format a due date for display, e.g. "May 1, 2024"."""
    return f"{value:%b} {value.day}, {value.year}"


def _parse_due_date(raw: Any) -> Optional[date]:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise DataCorruption(f"dueDate must be a string, got {type(raw).__name__}")
    try:
        if "T" in raw:
            # Older records stored a full timestamp at midnight
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        return date.fromisoformat(raw)
    except ValueError as e:
        raise DataCorruption(f"Unparseable dueDate {raw!r}") from e


@dataclass
class Task:
    """
    A single task.

    Attributes:
        title: Display title (trimmed and non-empty; checked by the caller)
        id: Unique identifier (UUID), fixed for the task's lifetime
        is_completed: Whether the task is done
        priority: Priority level (low, medium, high)
        due_date: Optional calendar date
        category: Category name, always known to the owning store
    """

    title: str
    id: str = field(default_factory=lambda: str(uuid4()))
    is_completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None
    category: str = DEFAULT_CATEGORY

    def __post_init__(self):
        if not isinstance(self.priority, TaskPriority):
            self.priority = TaskPriority.parse(self.priority)
        if isinstance(self.due_date, datetime):
            self.due_date = self.due_date.date()

    def __setattr__(self, name, value):
        if name == "id" and "id" in self.__dict__:
            raise AttributeError("Task id cannot be changed")
        super().__setattr__(name, value)

    def to_dict(self) -> dict:
        """Convert to a storage record."""
        return {
            "id": self.id,
            "title": self.title,
            "isCompleted": self.is_completed,
            "priority": self.priority.value,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """
        Create a Task from a storage record.

        Raises:
            DataCorruption: If a field is missing, mistyped or out of range
        """
        if not isinstance(data, dict):
            raise DataCorruption(f"Task record must be an object, got {type(data).__name__}")

        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise DataCorruption(f"Task record missing fields: {', '.join(missing)}")

        for name in ("id", "title", "category"):
            if not isinstance(data[name], str):
                raise DataCorruption(f"{name} must be a string")
        if not isinstance(data["isCompleted"], bool):
            raise DataCorruption("isCompleted must be a boolean")
        if not data["category"] or data["category"] == ALL_CATEGORIES:
            raise DataCorruption(f"Invalid task category {data['category']!r}")

        try:
            priority = TaskPriority.parse(data["priority"])
        except ValueError as e:
            raise DataCorruption(str(e)) from e

        return cls(
            id=data["id"],
            title=data["title"],
            is_completed=data["isCompleted"],
            priority=priority,
            due_date=_parse_due_date(data.get("dueDate")),
            category=data["category"],
        )

    def to_json(self) -> str:
        """Serialize to one JSON object."""
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "Task":
        """Parse one JSON object produced by to_json()."""
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise DataCorruption(f"Task entry is not valid JSON: {e}") from e
        return cls.from_dict(data)


@dataclass(frozen=True)
class TaskStatistics:
    """Progress counters over the full task list."""

    total: int = 0
    completed: int = 0

    @property
    def pending(self) -> int:
        return self.total - self.completed

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
        }

