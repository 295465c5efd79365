# backend/minibnb/database.py
"""SQLAlchemy engine, session factory and declarative base."""

import logging
from typing import Any, Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeMeta, Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .core.config import settings

logger = logging.getLogger(__name__)

IN_MEMORY_SQLITE_URLS = {"sqlite://", "sqlite:///", "sqlite:///:memory:"}


def build_engine(database_url: str) -> Engine:
    """
    Create the engine for a database URL.

    SQLite connections are shared across threads because route handlers run
    services in a worker thread; an in-memory database keeps a single
    connection so every session sees the same tables.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if database_url in IN_MEMORY_SQLITE_URLS:
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(
        database_url,
        pool_size=10,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600,
        connect_args={"connect_timeout": 10, "application_name": "minibnb_backend"},
    )


engine: Engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)

Base: DeclarativeMeta = declarative_base()


def session_scope() -> Generator[Session, None, None]:
    """Yield a session; roll back on error and always close."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        logger.debug("Rolling back session after error")
        db.rollback()
        raise
    finally:
        db.close()
