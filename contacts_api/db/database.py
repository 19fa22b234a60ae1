"""Database configuration and session management."""

import logging
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from config import get_settings
from contacts_api.models import Base
from contacts_api.text import remove_accents

logger = logging.getLogger(__name__)

# Get settings
settings = get_settings()

# Ensure a data directory exists if using SQLite
if settings.database_url.startswith("sqlite:///") and ":memory:" not in settings.database_url:
    # Extract a path from sqlite URL (sqlite:///path/to/db.sqlite3)
    db_path = settings.database_url.replace("sqlite:///", "")
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

pool_options = {} if ":memory:" in settings.database_url else {
    "pool_size": 5,
    "max_overflow": 10,
    "pool_recycle": 3600,
}

# Create engine
engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.database_url.startswith("sqlite") else {},
    echo=settings.database_echo,  # Log SQL statements if configured
    pool_pre_ping=True,
    **pool_options
)


def configure_sqlite_connection(dbapi_connection, connection_record):
    """Enable foreign keys and register ``unaccent`` on SQLite connections.

    PostgreSQL provides ``unaccent`` through its extension of the same name.
    """
    dbapi_connection.create_function("unaccent", 1, remove_accents, deterministic=True)
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if settings.database_url.startswith("sqlite"):
    event.listen(engine, "connect", configure_sqlite_connection)

# Create sessionmaker
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db() -> Generator[Session, None, None]:
    """Dependency to get database session.

    Yields a database session and ensures it's closed after use.
    This should be used as a FastAPI dependency.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize a database by creating all tables.

    This should be called on application startup.
    """
    logger.info(f"Creating database tables at {settings.database_url}")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully")


def drop_db() -> None:
    """Drop all database tables.

    WARNING: This will delete all data!
    This should only be used for testing or development.
    """
    logger.warning(f"Dropping all database tables at {settings.database_url}")
    Base.metadata.drop_all(bind=engine)
    logger.warning("All database tables dropped")
