"""
Database Connection Management.

The earmark database is hosted elsewhere and only ever read. This module
owns the SQLAlchemy engine and hands out short-lived, read-only sessions.
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import get_settings
from src.core.logging_config import get_logger

logger = get_logger(__name__)


def _redact(db_url: str) -> str:
    """Connection URL without the password, for logs."""
    try:
        return make_url(db_url).render_as_string(hide_password=True)
    except Exception:
        return "<unparseable database url>"


class DatabaseConnection:
    """
    Engine plus session factory for the earmark database.

    Example:
        >>> db = DatabaseConnection("sqlite:///earmarks.db")
        >>> with db.get_session() as session:
        ...     session.execute(select(Earmark).limit(1)).scalars().all()
    """

    def __init__(self, connection_url: Optional[str] = None):
        db_url = connection_url or get_settings().database_url

        engine_options = {"pool_pre_ping": True}
        # SQLite (local runs and tests) uses a pool without size options
        if not db_url.startswith("sqlite"):
            engine_options.update(pool_size=5, max_overflow=10, pool_recycle=1800)

        self.engine = create_engine(db_url, **engine_options)
        self._session_factory = sessionmaker(bind=self.engine, autoflush=False)

        logger.info(f"Database engine created for {_redact(db_url)}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Read-only session; the transaction is always rolled back.

        Yields:
            SQLAlchemy Session object
        """
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise
        finally:
            session.rollback()
            session.close()

    def close(self) -> None:
        """Close all connections in the pool."""
        self.engine.dispose()
        logger.info("Database connections closed")


_db_connection: Optional[DatabaseConnection] = None


def get_database() -> DatabaseConnection:
    """Get or create the shared connection; nothing connects before first use."""
    global _db_connection
    if _db_connection is None:
        _db_connection = DatabaseConnection()
    return _db_connection


def reset_database() -> None:
    """Dispose the shared connection (useful for testing)."""
    global _db_connection
    if _db_connection is not None:
        _db_connection.close()
    _db_connection = None
