"""
Database connection, session management and unit of work
"""
import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, pool
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from wms.config import settings
from wms.exceptions import ConflictError

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False):
    """Create an engine; PostgreSQL gets the pooled/timeout setup, SQLite a thread-safe one."""
    if database_url.startswith("postgresql"):
        return create_engine(
            database_url,
            poolclass=pool.QueuePool,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_pre_ping=True,  # Verify connections before using
            pool_recycle=3600,  # Recycle connections after 1 hour
            connect_args={
                "connect_timeout": 10,
                "options": "-c statement_timeout=120000",
            },
            echo=echo,
        )
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # In-memory SQLite: every session must share the one connection
        return create_engine(database_url, connect_args=connect_args, poolclass=pool.StaticPool, echo=echo)
    return create_engine(database_url, connect_args=connect_args, echo=echo)


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI to get database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session) -> Generator[Session, None, None]:
    """
    Commit everything written inside the block as one transaction.

    A ledger row and its track row are always written in the same block, so a
    failed track insert rolls the ledger change back with it.
    """
    try:
        yield db
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning("Concurrent modification detected: %s", e)
        raise ConflictError("Record was modified by another request, reload and retry") from e
    except Exception:
        db.rollback()
        raise


def create_tables() -> None:
    """Create all tables registered on Base (used on startup and by tests)."""
    import wms.models  # noqa: F401  (register models on Base.metadata)
    Base.metadata.create_all(bind=engine)
