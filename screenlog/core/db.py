"""
Database session management.

Provides explicit ORM session handling with SQLAlchemy.
One engine and session factory per database file, reused for the
lifetime of the process.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from screenlog.core.config import Config
from screenlog.core.models import Base

_engines: Dict[str, Engine] = {}
_session_factories: Dict[str, sessionmaker] = {}


def _db_key(config: Config) -> str:
    return str(Path(config.database_path).resolve())


def get_engine(config: Config) -> Engine:
    """
    Get the SQLAlchemy engine for the configured database.

    Created on first use. Uses SQLite with WAL mode so a report can read
    while an entry is written.
    """
    key = _db_key(config)
    engine = _engines.get(key)
    if engine is not None:
        return engine

    db_path = Path(config.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
    )

    with engine.connect() as conn:
        conn.execute(text("PRAGMA journal_mode=WAL"))
        conn.commit()

    _engines[key] = engine
    _session_factories[key] = sessionmaker(bind=engine)
    return engine


def dispose_engine(config: Config) -> None:
    """
    Close the pooled connections for the configured database.

    The next session opens a fresh engine.
    """
    key = _db_key(config)
    _session_factories.pop(key, None)
    engine = _engines.pop(key, None)
    if engine is not None:
        engine.dispose()


def init_db(config: Config) -> None:
    """
    Initialize database schema.

    Creates all tables if they don't exist.
    """
    Base.metadata.create_all(get_engine(config))


def get_session(config: Config) -> Session:
    """
    Create a new database session.

    Remember to close or use as context manager.
    """
    get_engine(config)
    return _session_factories[_db_key(config)]()


@contextmanager
def session_scope(config: Config) -> Generator[Session, None, None]:
    """
    Provide transactional scope around a series of operations.

    Usage:
        with session_scope(config) as session:
            session.merge(item)
    """
    session = get_session(config)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
