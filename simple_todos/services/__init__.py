"""Services layer - Business logic"""

from .task_store import TaskStore, generate_task_id
from .view_projector import ViewProjector, filtered_view, active_count, has_completed
from .app_context import AppContext, create_app_context

__all__ = [
    "TaskStore", "generate_task_id",
    "ViewProjector", "filtered_view", "active_count", "has_completed",
    "AppContext", "create_app_context",
]
