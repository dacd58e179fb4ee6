from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session
from app.core.config import settings
from app.core.exceptions import StorageFailure
import logging

logger = logging.getLogger(__name__)


def normalize_database_url(db_url: str) -> str:
    """SQLAlchemy prefers postgresql:// over postgres://."""
    if db_url.startswith("postgres://"):
        db_url = db_url.replace("postgres://", "postgresql://", 1)
    return db_url


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(db_url: str, echo: bool = False) -> Engine:
    """
    Build the storage handle shared by all localization components.

    SQLite connections get foreign key enforcement switched on so a cell can
    never point at a missing key or language, matching PostgreSQL.
    """
    db_url = normalize_database_url(db_url)

    if db_url.startswith("sqlite"):
        db_engine = create_engine(
            db_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )
        event.listen(db_engine, "connect", _enable_sqlite_foreign_keys)
        return db_engine

    return create_engine(
        db_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before using
        pool_size=5,
        max_overflow=10,
    )


logger.info(f"Connecting to database: {settings.database_url[:20]}...")  # Log partial URL for debugging

engine = create_db_engine(settings.database_url)


def get_engine() -> Engine:
    """Dependency for getting the storage handle."""
    return engine


@contextmanager
def unit_of_work(db_engine: Engine) -> Iterator[Session]:
    """
    Run a block as one transaction on its own session.

    Commits when the block exits cleanly and rolls back on any exception.
    Constraint violations are re-raised as IntegrityError so callers can
    translate them; every other database error becomes StorageFailure.
    Loaded objects stay readable after the session closes.
    """
    try:
        with Session(db_engine, expire_on_commit=False) as session:
            with session.begin():
                yield session
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        logger.error(f"Transaction aborted: {e}")
        raise StorageFailure(f"Storage operation failed: {e}") from e


def init_db(db_engine: Engine = None):
    """Initialize database tables."""
    SQLModel.metadata.create_all(db_engine or engine)
