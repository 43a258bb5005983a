"""
Application Context - The one object a presentation layer is handed.

Holds the store, the projector, the selected filter and the display theme
explicitly instead of leaving them in module globals.
"""

import logging
from typing import Optional, Union

from simple_todos.domain.models import FilterMode
from simple_todos.infra.config import Settings, get_settings
from simple_todos.infra.db import DatabaseEngine, init_db
from simple_todos.infra.repository import KeyValueStore, KeyValueRepository
from simple_todos.services.task_store import TaskStore
from simple_todos.services.view_projector import ViewProjector

logger = logging.getLogger(__name__)


class AppContext:
    """Composed application state: settings, storage, store and views."""

    def __init__(
        self,
        settings: Settings,
        storage: KeyValueStore,
        engine: Optional[DatabaseEngine] = None,
    ):
        self.settings = settings
        self.storage = storage
        self.engine = engine
        self.store = TaskStore(storage, key=settings.storage_key)
        self.projector = ViewProjector(self.store)

    @property
    def filter_mode(self) -> FilterMode:
        return self.projector.mode

    @filter_mode.setter
    def filter_mode(self, value: Union[FilterMode, str]):
        self.projector.mode = value

    @property
    def theme(self) -> str:
        return self.settings.preferences.theme

    def toggle_theme(self) -> str:
        """Switch between light and dark, remember the choice, return the new theme"""
        prefs = self.settings.preferences
        prefs.theme = "dark" if prefs.theme == "light" else "light"
        try:
            self.settings.save_preferences()
        except OSError as e:
            logger.warning(f"Failed to save preferences: {e}")
        return prefs.theme

    def close(self):
        self.projector.close()
        if self.engine is not None:
            self.engine.dispose()


def create_app_context(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStore] = None,
) -> AppContext:
    """
    Build an AppContext.

    Without an explicit storage the task list lives in the SQLite database
    named by the settings.
    """
    settings = settings or get_settings()
    engine = None
    if storage is None:
        engine = init_db(settings.get_db_url())
        storage = KeyValueRepository(engine=engine)
    return AppContext(settings, storage, engine=engine)
