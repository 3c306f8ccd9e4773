"""
Storage factory: owns the pooled engine and hands out request-scoped storage.
"""

import logging
from typing import Any, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from eligibility_store.backends.sql import SQLStorage
from eligibility_store.interfaces import StorageInterface

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

# Singleton engine and db_url
_engine: Optional[Engine] = None
_db_url: Optional[str] = None


def build_engine(settings: Settings) -> Engine:
    """
    Create an engine with a bounded, health-checked connection pool.

    In-memory SQLite cannot be shared across pooled connections, so it gets a
    single static connection instead.
    """
    url = make_url(settings.database_url)
    kwargs: dict[str, Any] = {"pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        # Connections are checked out by worker threads, not the creating thread
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
            return create_engine(url, **kwargs)

    kwargs.update(
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_timeout=settings.pool_timeout,
        pool_recycle=settings.pool_recycle,
    )
    return create_engine(url, **kwargs)


def get_engine(settings: Optional[Settings] = None) -> tuple[Engine, str]:
    """
    Returns a singleton instance of the SQLAlchemy engine and db_url.
    """
    global _engine, _db_url
    if _engine is None:
        settings = settings or get_settings()
        _engine = build_engine(settings)
        _db_url = settings.database_url
        logger.info("Database engine created (backend=%s)", _engine.dialect.name)
    return _engine, _db_url


def get_storage() -> Generator[StorageInterface, None, None]:
    """
    FastAPI dependency that provides a storage instance with a request-scoped session.

    The session's connection goes back to the pool on every exit path, including
    errors raised by the endpoint and cancelled requests.
    """
    engine, _ = get_engine()
    storage = SQLStorage(Session(engine))
    try:
        yield storage
    finally:
        storage.close()


def close_storage() -> None:
    """
    Dispose of the engine and its pooled connections.
    """
    global _engine, _db_url
    if _engine is not None:
        _engine.dispose()
        _engine = None
        _db_url = None
