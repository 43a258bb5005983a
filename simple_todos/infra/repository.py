"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
The task store only needs "get text by key" and "set text by key". Hiding the
database behind that pair makes it easy to:
- Switch database implementations
- Run fully in memory for tests or throwaway sessions
- Simulate an unavailable store
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from simple_todos.infra.db import KeyValueModel, DatabaseEngine


class KeyValueStore(Protocol):
    """The persistent store collaborator: text values under string keys."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class KeyValueRepository:
    """
    Handles key-value persistence in the kv_store table.

    Either an engine or an already open session must be supplied. An injected
    session is reused for every call and left open (handy in tests); sessions
    made from the engine are closed after each call.
    """

    def __init__(self, engine: Optional[DatabaseEngine] = None, session: Optional[Session] = None):
        if engine is None and session is None:
            raise ValueError("KeyValueRepository needs an engine or a session")
        self.engine = engine
        self.session = session

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        """Yield the injected session, or a fresh one that is closed afterwards"""
        if self.session is not None:
            try:
                yield self.session
            except Exception:
                self.session.rollback()
                raise
            return
        with self.engine.get_session() as session:
            yield session

    def get(self, key: str) -> Optional[str]:
        """Get the stored value for key, or None if absent"""
        with self._session_scope() as session:
            return session.scalar(select(KeyValueModel.value).where(KeyValueModel.key == key))

    def set(self, key: str, value: str) -> None:
        """Insert or replace the value for key"""
        with self._session_scope() as session:
            session.merge(KeyValueModel(key=key, value=value))
            session.commit()


class MemoryKeyValueStore:
    """Dict-backed store for sessions that should not touch the disk."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
