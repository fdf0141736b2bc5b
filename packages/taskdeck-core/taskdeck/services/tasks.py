"""
Task Store for Taskdeck.

Owns the task list and the category list, applies every mutation, computes
the filtered views and writes the full collection back to a key-value
store after each change.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime

from taskdeck.errors import DataCorruption, PersistenceFailure
from taskdeck.models.task import (
    ALL_CATEGORIES,
    DEFAULT_CATEGORY,
    Task,
    TaskPriority,
    TaskStatistics,
)
from taskdeck.storage.interface import CATEGORIES_KEY, TASKS_KEY, KeyValueStore

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class TaskStore:
    """
    Single source of truth for tasks and categories.

    Mutations run synchronously and notify listeners before returning.
    Saves are scheduled on the running event loop and never awaited by the
    caller; a failed save is logged and the in-memory state stays as is.
    """

    def __init__(self, adapter: KeyValueStore):
        """
        Initialize task store.

        Args:
            adapter: Key-value store used for loading and saving. The caller
                owns it and is responsible for closing it.
        """
        self._adapter = adapter
        self._tasks: list[Task] = []
        self._categories: list[str] = [ALL_CATEGORIES, DEFAULT_CATEGORY]
        self._search_query = ""
        self._selected_category = ALL_CATEGORIES
        self._listeners: list[Listener] = []

        self._save_lock = asyncio.Lock()
        self._pending: set[asyncio.Task] = set()
        self._dirty = False
        self._load_task: asyncio.Task | None = None

    @property
    def adapter(self) -> KeyValueStore:
        """Get the key-value store."""
        return self._adapter

    # ---- observers ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a zero-argument callback run after every change.

        Returns:
            A callable that unsubscribes the listener
        """
        if listener not in self._listeners:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception(f"Task store listener {listener!r} failed")

    # ---- derived views ----

    @property
    def tasks(self) -> list[Task]:
        """Tasks matching the current search query and category filter."""
        query = self._search_query.lower()
        selected = self._selected_category
        return [
            task for task in self._tasks
            if query in task.title.lower()
            and (selected == ALL_CATEGORIES or task.category == selected)
        ]

    @property
    def all_tasks(self) -> list[Task]:
        """Every task, unfiltered, in insertion order."""
        return list(self._tasks)

    @property
    def categories(self) -> list[str]:
        """Known categories, "All" first."""
        return list(self._categories)

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def selected_category(self) -> str:
        return self._selected_category

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def get_task_statistics(self) -> TaskStatistics:
        """Count total and completed tasks, ignoring the active filters."""
        completed = sum(1 for task in self._tasks if task.is_completed)
        return TaskStatistics(total=len(self._tasks), completed=completed)

    # ---- mutations ----

    def _register_category(self, name: str) -> None:
        if name not in self._categories:
            self._categories.append(name)

    def _changed(self) -> None:
        self._persist()
        self._notify()

    def add_task(self, task: Task) -> None:
        """Append a task, registering its category if it is new."""
        self._tasks.append(task)
        self._register_category(task.category)
        logger.info(f"Added task: {task.id} - {task.title}")
        self._changed()

    def create_task(
        self,
        title: str,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        due_date: date | None = None,
        category: str = DEFAULT_CATEGORY,
    ) -> Task:
        """
        Build a new task and add it.

        Args:
            title: Task title, already trimmed by the caller
            priority: Priority (low, medium, high)
            due_date: Optional due date
            category: Category name; registered if new

        Returns:
            The added Task
        """
        task = Task(title=title, priority=priority, due_date=due_date, category=category)
        self.add_task(task)
        return task

    def edit_task(
        self,
        task_id: str,
        title: str | None = None,
        priority: TaskPriority | str | None = None,
        due_date: date | None = None,
        category: str | None = None,
    ) -> bool:
        """
        Update the given fields of a task; None leaves a field unchanged.

        Returns:
            True if the task exists and was updated. An unknown ID changes
            nothing and does not notify.
        """
        task = self.get_task(task_id)
        if task is None:
            logger.debug(f"Edit ignored, no task {task_id}")
            return False

        if title is not None:
            task.title = title
        if priority is not None:
            task.priority = TaskPriority.parse(priority)
        if due_date is not None:
            task.due_date = due_date.date() if isinstance(due_date, datetime) else due_date
        if category is not None:
            task.category = category
            self._register_category(category)

        self._changed()
        return True

    def toggle_task(self, task_id: str) -> bool:
        """Flip a task between done and not done."""
        task = self.get_task(task_id)
        if task is None:
            logger.debug(f"Toggle ignored, no task {task_id}")
            return False

        task.is_completed = not task.is_completed
        self._changed()
        return True

    def delete_task(self, task_id: str) -> bool:
        """
        Remove a task. Its category stays registered.

        Returns:
            True if a task was removed
        """
        before = len(self._tasks)
        self._tasks = [task for task in self._tasks if task.id != task_id]
        removed = len(self._tasks) != before
        if removed:
            logger.info(f"Deleted task: {task_id}")
        self._changed()
        return removed

    def add_category(self, name: str) -> None:
        """Register a category. Already-known names are ignored."""
        if name in self._categories:
            return
        self._categories.append(name)
        self._changed()

    def set_search_query(self, text: str) -> None:
        """Replace the search query. Not persisted."""
        self._search_query = text
        self._notify()

    def set_selected_category(self, name: str) -> None:
        """Replace the category filter. Not persisted."""
        self._selected_category = name
        self._notify()

    # ---- persistence ----

    def _snapshot(self) -> tuple[list[str], list[str]]:
        task_entries = [task.to_json() for task in self._tasks]
        category_entries = [c for c in self._categories if c != ALL_CATEGORIES]
        return task_entries, category_entries

    def _persist(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Saved on the next flush()
            self._dirty = True
            return

        self._dirty = False
        save = loop.create_task(self._write())
        self._pending.add(save)
        save.add_done_callback(self._pending.discard)

    async def _write(self) -> None:
        # Writes run one at a time in mutation order; each serializes the state
        # current when it runs, after any pending startup load
        async with self._save_lock:
            if self._load_task is not None and not self._load_task.done():
                await self._load_task
            task_entries, category_entries = self._snapshot()
            try:
                tasks_saved = await self._adapter.set(TASKS_KEY, task_entries)
                categories_saved = await self._adapter.set(CATEGORIES_KEY, category_entries)
            except PersistenceFailure as e:
                logger.error(f"Error saving tasks: {e}")
                return
            except Exception:
                logger.exception(f"Unexpected error saving tasks to {self._adapter.name}")
                return

            if not (tasks_saved and categories_saved):
                logger.error(f"Error saving tasks: {self._adapter.name} rejected the write")
                return

            logger.debug(f"Saved {len(task_entries)} tasks, {len(category_entries)} categories")

    def start(self) -> asyncio.Task:
        """
        Schedule the startup load on the running event loop.

        Returns:
            The asyncio task running load(); repeated calls return the same one
        """
        if self._load_task is None:
            self._load_task = asyncio.get_running_loop().create_task(self.load())
        return self._load_task

    async def load(self) -> None:
        """
        Replace the in-memory state with what the key-value store holds.

        Never raises for bad data: corrupted records reset the store to an
        empty task list with the default categories, and read failures keep
        the current state. Listeners are notified once either way.
        """
        try:
            task_entries = await self._adapter.get(TASKS_KEY)
            category_entries = await self._adapter.get(CATEGORIES_KEY)
            tasks = [Task.from_json(entry) for entry in task_entries or []]
        except DataCorruption as e:
            logger.error(f"Stored tasks are corrupted, starting with an empty list: {e}")
            self._tasks = []
            self._categories = [ALL_CATEGORIES, DEFAULT_CATEGORY]
        except PersistenceFailure as e:
            logger.error(f"Error loading tasks: {e}")
        except Exception:
            logger.exception(f"Unexpected error loading tasks from {self._adapter.name}")
        else:
            self._tasks = tasks
            self._categories = self._merge_categories(category_entries, tasks)
            logger.info(
                f"Loaded {len(tasks)} tasks, {len(self._categories) - 1} categories "
                f"from {self._adapter.name}"
            )

        self._notify()

    @staticmethod
    def _merge_categories(stored: list[str] | None, tasks: list[Task]) -> list[str]:
        names = [ALL_CATEGORIES]
        for name in stored or []:
            if name != ALL_CATEGORIES and name not in names:
                names.append(name)
        if DEFAULT_CATEGORY not in names:
            names.insert(1, DEFAULT_CATEGORY)
        for task in tasks:
            if task.category not in names:
                names.append(task.category)
        return names

    async def flush(self) -> None:
        """Wait for the startup load and every scheduled save to finish."""
        if self._load_task is not None and not self._load_task.done():
            await self._load_task

        while self._pending:
            await asyncio.gather(*list(self._pending))

        if self._dirty:
            self._dirty = False
            await self._write()

    async def close(self) -> None:
        """Flush pending saves and drop all listeners."""
        await self.flush()
        self._listeners.clear()
        logger.debug("Task store closed")
