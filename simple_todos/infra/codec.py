"""
Persistence codec for the task collection.

The stored blob is a JSON array of {"id", "title", "completed"} objects,
newest task first. Decoding never raises: anything that does not validate
yields an empty list.
"""

import logging
from typing import Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from simple_todos.domain.models import Task

logger = logging.getLogger(__name__)

_task_list = TypeAdapter(List[Task])


def serialize(tasks: Iterable[Task]) -> str:
    """Encode tasks, in order, as JSON text"""
    return _task_list.dump_json(list(tasks)).decode('utf-8')


def deserialize(text: Optional[str]) -> List[Task]:
    """
    Decode a stored blob back into tasks.

    Returns an empty list when text is missing, is not valid JSON, is not a
    list of well-formed tasks, or repeats an id.
    """
    if not text:
        return []

    try:
        tasks = _task_list.validate_json(text)
    except (ValidationError, ValueError) as e:
        logger.warning(f"Ignoring unreadable task data: {e.__class__.__name__}")
        return []

    if len({task.id for task in tasks}) != len(tasks):
        logger.warning("Ignoring task data with duplicate ids")
        return []

    return tasks
