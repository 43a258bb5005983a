"""
View Projector - Read-only views of the task list.

The module-level functions are pure: same tasks and mode in, same answer out,
and the input is never modified. ViewProjector wraps them for a presentation
layer that wants the current view kept up to date as the store changes.
"""

import logging
from typing import Callable, Iterable, List, Union

from simple_todos.domain.models import FilterMode, Task
from simple_todos.services.task_store import TaskStore

logger = logging.getLogger(__name__)

ViewListener = Callable[["ViewProjector"], None]


def filtered_view(tasks: Iterable[Task], mode: Union[FilterMode, str] = FilterMode.ALL) -> List[Task]:
    """
    Tasks visible under mode, in their original order.

    Raises ValueError for a mode that is not all/active/completed.
    """
    mode = FilterMode(mode)
    if mode is FilterMode.ACTIVE:
        return [t for t in tasks if not t.completed]
    if mode is FilterMode.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


def active_count(tasks: Iterable[Task]) -> int:
    """Number of tasks still to do"""
    return sum(1 for t in tasks if not t.completed)


def has_completed(tasks: Iterable[Task]) -> bool:
    return any(t.completed for t in tasks)


class ViewProjector:
    """
    Keeps the derived views of a TaskStore current.

    Recomputes when the store reports a change or when the filter mode is
    set, then tells its own subscribers.
    """

    def __init__(self, store: TaskStore, mode: Union[FilterMode, str] = FilterMode.ALL):
        self.store = store
        self._mode = FilterMode(mode)
        self._listeners: List[ViewListener] = []

        self.visible: List[Task] = []
        self.remaining: int = 0
        self.any_completed: bool = False

        self._recompute()
        self._unsubscribe = store.subscribe(self._on_store_changed)

    @property
    def mode(self) -> FilterMode:
        return self._mode

    @mode.setter
    def mode(self, value: Union[FilterMode, str]):
        self._mode = FilterMode(value)
        self._refresh()

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        """Call listener(projector) whenever the views are recomputed"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self):
        """Stop following the store"""
        self._unsubscribe()

    def _on_store_changed(self, store: TaskStore):
        self._refresh()

    def _recompute(self):
        tasks = self.store.tasks
        self.visible = filtered_view(tasks, self._mode)
        self.remaining = active_count(tasks)
        self.any_completed = has_completed(tasks)

    def _refresh(self):
        self._recompute()
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception(f"View listener {listener!r} failed")
