from functools import lru_cache
from contextlib import contextmanager
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.core.config import get_settings
from portal.db.tables import metadata

logger = logging.getLogger(__name__)


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """
    Build an engine for the given URL.

    PostgreSQL gets a connection pool:
    pool_size=5: maintain 5 connections ready
    max_overflow=10: allow 10 extra connections under load
    In-memory SQLite shares a single connection across threads.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(url, pool_size=5, max_overflow=10, pool_pre_ping=True, echo=echo)


@lru_cache()
def get_engine() -> Engine:
    settings = get_settings()
    return create_db_engine(settings.database_url, echo=settings.db_echo)


def init_schema(engine: Engine) -> None:
    """Create all tables and indexes that don't exist yet."""
    metadata.create_all(engine)


@contextmanager
def get_db_session(factory: sessionmaker):
    """
    Context manager for database sessions.
    Usage:
        with get_db_session(factory) as db:
            db.execute(text("SELECT 1"))
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_db_connection(engine: Engine) -> bool:
    """
    Test if the database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with engine.connect() as conn:
            return conn.execute(text("SELECT 1")).scalar() == 1
    except Exception as e:
        logger.warning("Database connection failed: %s", e)
        return False
