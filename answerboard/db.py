"""
Database configuration with lazy initialization.

The engine is created on first access so the app can import (and answer
health checks) before the database is reachable. `unit_of_work` is the only
place that commits or rolls back on behalf of the services.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from sqlalchemy.pool import QueuePool

from .core.config import settings
from .core.env import is_production_env
from .errors import QAError, StorageError, WriteConflictError

logger = logging.getLogger(__name__)

_engine = None
_SessionLocal = None

Base = declarative_base()


def get_engine():
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        if is_production_env() and settings.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite is not supported in production. Point DATABASE_URL at PostgreSQL."
            )

        db_url_safe = settings.database_url[:30] + "..." if len(settings.database_url) > 30 else settings.database_url
        logger.info("Creating database engine for: %s", db_url_safe)

        if settings.database_url.startswith("sqlite"):
            _engine = create_engine(
                settings.database_url,
                poolclass=QueuePool,
                pool_size=5,
                max_overflow=0,
                connect_args={"check_same_thread": False},
            )
        else:
            _engine = create_engine(
                settings.database_url,
                poolclass=QueuePool,
                pool_size=20,
                max_overflow=10,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
    return _engine


def get_session_local():
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db():
    """
    Dependency that provides a database session.
    Used by FastAPI's dependency injection.
    """
    session_class = get_session_local()
    db = session_class()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables."""
    from . import models  # noqa: F401  registers mappers on Base

    Base.metadata.create_all(bind=get_engine())


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """
    Run a block of writes atomically.

    Commits when the block exits normally. On any error the session is rolled
    back; SQLAlchemy errors are re-raised as StorageError (WriteConflictError
    for integrity violations) and domain errors pass through unchanged.
    """
    try:
        yield db
        db.commit()
    except QAError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning("Write conflict, unit of work rolled back: %s", e.orig)
        raise WriteConflictError(str(e.orig)) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Storage failure, unit of work rolled back: %s", e)
        raise StorageError("Internal storage error") from e
    except Exception:
        db.rollback()
        raise


@contextmanager
def storage_errors() -> Iterator[None]:
    """Translate driver errors raised by read paths into StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Storage failure during read: %s", e)
        raise StorageError("Internal storage error") from e
