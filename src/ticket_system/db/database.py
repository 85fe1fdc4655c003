"""Engine, session factory and declarative base shared by every module."""

import logging
import os
import time
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from ..config import get_config

SLOW_QUERY_SECONDS = 0.1

query_logger = logging.getLogger("ticket_system.database.queries")


def _clip(statement: str, limit: int) -> str:
    return statement if len(statement) <= limit else statement[:limit] + "..."


def _apply_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")  # team_members.team_id -> teams.id
        cursor.execute("PRAGMA busy_timeout=5000")
    finally:
        cursor.close()


def _attach_query_timing(engine: Engine) -> None:
    """Log every statement at DEBUG and anything slower than ``SLOW_QUERY_SECONDS`` as a warning."""

    @event.listens_for(engine, "before_cursor_execute")
    def _start(conn, cursor, statement, parameters, context, executemany):
        context._ticket_query_started = time.perf_counter()

    @event.listens_for(engine, "after_cursor_execute")
    def _finish(conn, cursor, statement, parameters, context, executemany):
        elapsed = time.perf_counter() - context._ticket_query_started
        if elapsed > SLOW_QUERY_SECONDS:
            query_logger.warning(f"Slow query ({elapsed:.3f}s): {_clip(statement, 200)}")
        else:
            query_logger.debug(f"Query ({elapsed:.3f}s): {_clip(statement, 100)}")


def create_database_engine(
    database_url: Optional[str] = None, enable_query_logging: bool = False, echo: bool = False
) -> Engine:
    """Build an engine for ``database_url`` (defaults to ``get_database_url()``)."""
    url = database_url or get_database_url()
    echo = echo or os.getenv("SQL_DEBUG", "false").lower() == "true"

    if url.startswith("sqlite:"):
        engine = create_engine(url, echo=echo, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _apply_sqlite_pragmas)
    else:
        engine = create_engine(url, echo=echo, pool_pre_ping=True)

    if enable_query_logging:
        _attach_query_timing(engine)
    return engine


def get_database_url() -> str:
    """Environment first, then configuration."""
    return (
        os.getenv("TICKET_SYSTEM_DATABASE_URL")
        or os.getenv("DATABASE_URL")
        or get_config().database.url
    )


_db_config = get_config().database

engine = create_database_engine(
    get_database_url(), enable_query_logging=_db_config.log_queries, echo=_db_config.echo
)

# Sessions never autocommit; the unit of work decides.
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield the session of one request-scoped unit of work.

    The transaction commits when the request handler returns and rolls
    back if it raises.
    """
    from .unit_of_work import UnitOfWork

    with UnitOfWork(SessionLocal) as uow:
        yield uow.session


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all module tables (alternative to running alembic)."""
    from . import models  # noqa: F401  registers every module's tables

    Base.metadata.create_all(bind=bind or engine)
