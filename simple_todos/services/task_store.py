"""
Task Store - Owns the task list and every change made to it.

Architecture Decision: Observer Pattern (callbacks)
The store notifies subscribers after each change, keeping it decoupled from
whatever renders the list. Nothing here knows about the UI.

Failure policy: the in-memory list is the source of truth for the session.
A storage write that fails is logged and forgotten; a stored blob that cannot
be read starts the session with an empty list.
"""

import logging
import secrets
import string
import time
from typing import Callable, Iterator, List, Optional, Tuple

from pydantic import ValidationError

from simple_todos.domain.models import Task
from simple_todos.infra.codec import serialize, deserialize
from simple_todos.infra.repository import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todos"

_ID_ALPHABET = string.digits + string.ascii_lowercase

Listener = Callable[["TaskStore"], None]


def generate_task_id() -> str:
    """Epoch milliseconds plus six random base36 characters, e.g. '1760800000000-k3x9qa'"""
    suffix = ''.join(secrets.choice(_ID_ALPHABET) for _ in range(6))
    return f"{time.time_ns() // 1_000_000}-{suffix}"


class TaskStore:
    """
    Sole owner of the ordered task collection (newest first).

    Mutations never raise for blank titles or unknown ids; they simply do
    nothing. Each mutation that changes state writes the collection to the
    key-value store and then notifies subscribers.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        id_factory: Callable[[], str] = generate_task_id,
    ):
        self.storage = storage
        self.key = key
        self._id_factory = id_factory
        self._listeners: List[Listener] = []
        self._tasks: List[Task] = self._load()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Snapshot of the collection in display order"""
        return tuple(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, title: str) -> Optional[Task]:
        """
        Create a task from title and put it at the top of the list.

        Returns the new task, or None when the title is blank or otherwise
        rejected by validation.
        """
        title = title.strip()
        if not title:
            return None

        try:
            task = Task(id=self._new_id(), title=title, completed=False)
        except ValidationError as e:
            logger.debug(f"Rejected task title: {e.error_count()} error(s)")
            return None

        self._tasks.insert(0, task)
        self._changed()
        return task

    def toggle(self, task_id: str) -> bool:
        """Flip the completed flag. Returns False if no such task."""
        index = self._index_of(task_id)
        if index is None:
            return False

        task = self._tasks[index]
        self._tasks[index] = task.model_copy(update={"completed": not task.completed})
        self._changed()
        return True

    def delete(self, task_id: str) -> bool:
        """Remove a task. Returns False if no such task."""
        index = self._index_of(task_id)
        if index is None:
            return False

        del self._tasks[index]
        self._changed()
        return True

    def edit(self, task_id: str, new_title: str) -> bool:
        """
        Rename a task.

        A title that is blank after trimming (or fails validation) is
        discarded and the old title kept. Returns True only if the title
        actually changed.
        """
        index = self._index_of(task_id)
        new_title = new_title.strip()
        if index is None or not new_title:
            return False

        task = self._tasks[index]
        if new_title == task.title:
            return False

        try:
            renamed = Task(id=task.id, title=new_title, completed=task.completed)
        except ValidationError as e:
            logger.debug(f"Rejected title for task {task.id}: {e.error_count()} error(s)")
            return False

        self._tasks[index] = renamed
        self._changed()
        return True

    def clear_completed(self) -> int:
        """Remove every completed task. Returns how many were removed."""
        remaining = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(remaining)
        if removed:
            self._tasks = remaining
            self._changed()
        return removed

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call listener(store) after every state change.

        Returns a function that removes the subscription.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, task_id: str) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _new_id(self) -> str:
        existing = {t.id for t in self._tasks}
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()
        return task_id

    def _load(self) -> List[Task]:
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.warning(f"Could not read '{self.key}' from storage, starting empty: {e}")
            return []

        tasks = deserialize(raw)
        logger.info(f"Loaded {len(tasks)} task(s) from '{self.key}'")
        return tasks

    def _save(self):
        try:
            self.storage.set(self.key, serialize(self._tasks))
        except Exception as e:
            logger.warning(f"Could not write '{self.key}' to storage: {e}")

    def _changed(self):
        self._save()
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception(f"Task store listener {listener!r} failed")
