"""
Database connection and session management (SQLite).
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ai_notes.config import get_config
from ai_notes.logger import get_logger
from ai_notes.models import Base

logger = get_logger(__name__)

MEMORY_PATH = ":memory:"

# Global engine and session factory
_engine: Optional[Engine] = None
_session_factory: Optional[sessionmaker] = None


def build_url(db_path: str) -> str:
    """Build a SQLite URL from a path or pass a URL through.

    Args:
        db_path: File path, ":memory:" or a sqlite:// URL

    Returns:
        SQLAlchemy URL string
    """
    if db_path.startswith("sqlite://"):
        return db_path
    if db_path == MEMORY_PATH:
        return "sqlite://"

    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path}"


def create_sqlite_engine(db_path: str, echo: bool = False) -> Engine:
    """Create a SQLite engine with foreign keys enabled.

    In-memory databases use a single shared connection so every session sees
    the same tables.
    """
    kwargs = {
        "echo": echo,
        "connect_args": {
            "check_same_thread": False,  # Flask serves requests from worker threads
            "timeout": 30,
        },
    }
    if db_path == MEMORY_PATH:
        kwargs["poolclass"] = StaticPool

    engine = create_engine(build_url(db_path), **kwargs)

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def get_engine() -> Engine:
    """Get or create the global database engine."""
    global _engine

    if _engine is None:
        db_config = get_config().database
        _engine = create_sqlite_engine(db_config.path, echo=db_config.echo)

    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the global session factory."""
    global _session_factory

    if _session_factory is None:
        _session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine(),
        )

    return _session_factory


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """Get a database session that commits on success.

    Example:
        >>> with get_db() as session:
        ...     notes = session.query(NoteModel).all()
    """
    session = get_session_factory()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(drop_all: bool = False) -> None:
    """Create all tables on the global engine.

    Args:
        drop_all: If True, drop all tables first (DANGEROUS!)
    """
    engine = get_engine()

    if drop_all:
        logger.warning("Dropping all tables - data will be lost!")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)


def close_db() -> None:
    """Dispose of the global engine."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _session_factory = None


class DatabaseManager:
    """Database manager for context-managed database operations."""

    def __init__(self, db_path: Optional[str] = None, echo: bool = False):
        """Initialize database manager.

        Args:
            db_path: SQLite path, ":memory:" or URL; the global engine when omitted
            echo: Echo SQL statements
        """
        self._db_path = db_path
        self._echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        """Get the database engine."""
        if self._engine is None:
            if self._db_path:
                self._engine = create_sqlite_engine(self._db_path, echo=self._echo)
            else:
                self._engine = get_engine()

        return self._engine

    def init_db(self, drop_all: bool = False) -> None:
        """Initialize database tables.

        Args:
            drop_all: If True, drop existing tables first
        """
        if drop_all:
            Base.metadata.drop_all(bind=self.engine)

        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Get a database session that commits on success."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
                bind=self.engine,
            )
        session = self._session_factory()

        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        """Close database connections."""
        if self._engine is not None and self._db_path:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None

    def __enter__(self) -> "DatabaseManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
