"""Infrastructure layer - Configuration, database and persistence"""

from .db import DatabaseEngine, init_db
from .models import KeyValueModel, Base
from .repository import KeyValueStore, KeyValueRepository, MemoryKeyValueStore
from .codec import serialize, deserialize

__all__ = [
    "DatabaseEngine", "init_db", "KeyValueModel", "Base",
    "KeyValueStore", "KeyValueRepository", "MemoryKeyValueStore",
    "serialize", "deserialize",
]
