"""Database configuration and session management."""

from .database import SessionLocal, configure_sqlite_connection, drop_db, engine, get_db, init_db

__all__ = ["engine", "get_db", "init_db", "drop_db", "SessionLocal", "configure_sqlite_connection"]
