"""
Database connection management for the estate CRM.

Provides engine construction, session factories and table management. The
manager is built explicitly from settings and handed to the SQL stores; no
module-level engine exists.
"""
from contextlib import contextmanager
from typing import Generator
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from .models import Base


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine.

    SQLite URLs share a single connection across threads so that in-memory
    databases survive between sessions.
    """
    is_sqlite = database_url.startswith("sqlite")
    kwargs = {"echo": echo}
    if is_sqlite:
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(database_url, **kwargs)


class DatabaseManager:
    """Engine, session factory and schema utilities for one database."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.engine = create_db_engine(database_url, echo=echo)
        self.session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_db(self):
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(bind=self.engine)

    # PUBLIC_INTERFACE
    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Open a database session.

        Yields:
            Session: SQLAlchemy session, closed on exit
        """
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def ping(self) -> bool:
        """Run a trivial query to check connectivity."""
        with self.session() as db:
            return db.execute(text("SELECT 1")).scalar() == 1

    def dispose(self):
        self.engine.dispose()
