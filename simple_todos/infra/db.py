"""
SQLAlchemy database models and configuration.

Architecture Decision: Why SQLAlchemy for a key-value blob?
- One ORM model gives us a portable key-value table without hand-written SQL
- SQLite file by default, any SQLAlchemy URL when configured
- Tests swap in an in-memory engine with no other changes

The engine is the synchronous API: every store operation completes before the
next user action is processed, so there is nothing to await.
"""

from datetime import datetime
import logging

from sqlalchemy import create_engine, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker, Session

logger = logging.getLogger(__name__)


# Base class for all models
class Base(DeclarativeBase):
    pass


class KeyValueModel(Base):
    """SQLAlchemy model for one entry of the local key-value store"""
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)


class DatabaseEngine:
    """
    Manages database connection and session lifecycle.

    One instance per application context; pass it to whatever needs sessions.
    """

    def __init__(self, db_url: str):
        self.engine = create_engine(db_url, echo=False)
        self.session_factory = sessionmaker(
            self.engine,
            class_=Session,
            expire_on_commit=False
        )

    def create_tables(self):
        """Create all tables in the database"""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session"""
        return self.session_factory()

    def dispose(self):
        """Release pooled connections"""
        self.engine.dispose()


def init_db(db_url: str) -> DatabaseEngine:
    """Create an engine for db_url and make sure the tables exist"""
    engine = DatabaseEngine(db_url)
    engine.create_tables()
    logger.info(f"Database initialised: {engine.engine.url}")
    return engine
