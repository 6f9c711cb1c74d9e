"""Database engine and helpers.

This module configures the SQLModel/SQLAlchemy engine from the
`DATABASE_URL` connection string and provides small helpers used by the
application, the process entrypoint and tests.
"""

import logging
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from .config import settings

logger = logging.getLogger("exercise_tracker.database")


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for `url`.

    SQLite connections are shared with the worker threads FastAPI uses to
    run synchronous endpoints, so thread checks are disabled for them.
    """
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)


def check_connection(target: Optional[Engine] = None) -> None:
    """Open a connection and run a trivial statement.

    Any driver error propagates to the caller; the process entrypoint
    turns it into a non-zero exit.
    """
    target = target or engine
    with target.connect() as conn:
        conn.execute(text("SELECT 1"))


def create_db_and_tables(target: Optional[Engine] = None) -> None:
    """Create the `users` and `exercises` tables if they are missing."""
    # models must be imported so their tables are registered on the metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(target or engine)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session
