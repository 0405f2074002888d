"""Database connection and initialization."""

import logging

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from jot.config import Settings

# Import all models so SQLModel registers them
import jot.models  # noqa: F401

logger = logging.getLogger(__name__)


def _set_sqlite_pragmas(dbapi_conn, _):
    """Foreign keys and the busy timeout are per connection in SQLite."""
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON")
        cur.execute("PRAGMA synchronous=NORMAL")
        cur.execute("PRAGMA busy_timeout=5000")
    finally:
        cur.close()


def create_db_engine(settings: Settings) -> Engine:
    """Create the engine for the configured SQLite file."""
    logger.info("Setting up database at %s", settings.db_path)
    engine = create_engine(
        settings.database_url,
        echo=settings.debug,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


def init_db(engine: Engine) -> None:
    """Create all tables and enable WAL mode."""
    SQLModel.metadata.create_all(engine)

    # WAL persists in the database file, so setting it once is enough
    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA journal_mode=WAL")
        conn.commit()
    logger.info("Database ready")


def get_session(request: Request):
    """FastAPI dependency: yields a database session bound to the app's engine."""
    with Session(request.app.state.engine) as session:
        yield session
