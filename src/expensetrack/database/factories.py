"""Engine, session and gateway construction.

Resolution order for where the data lives:
1. an explicit SQLAlchemy URL (``--database-url`` / EXPENSETRACK_DATABASE_URL)
2. a SQLite file path (``--db-path`` / EXPENSETRACK_DB_PATH)
3. ~/.expensetrack/expensetrack.db
"""

import logging
import os
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from expensetrack.database.models import Base
from expensetrack.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV_VAR = "EXPENSETRACK_DB_PATH"
DATABASE_URL_ENV_VAR = "EXPENSETRACK_DATABASE_URL"
DEFAULT_DB_DIR = Path.home() / ".expensetrack"
DEFAULT_DB_NAME = "expensetrack.db"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create the engine for ``database_url``, ensure the schema, and bind a session factory.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Session factory bound to the new engine
    """
    engine: Engine = create_engine(database_url, echo=False)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)


def sqlite_url(database_path: Optional[str] = None) -> str:
    """Build a SQLite URL, creating the file's parent directory if needed.

    Args:
        database_path: Path to the SQLite file. If None, checks EXPENSETRACK_DB_PATH,
            then defaults to ~/.expensetrack/expensetrack.db
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV_VAR)

    if database_path is None:
        path = DEFAULT_DB_DIR / DEFAULT_DB_NAME
    else:
        path = Path(database_path).expanduser()

    path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{path}"


def create_database(
    database_url: Optional[str] = None, database_path: Optional[str] = None
) -> SQLAlchemyDatabase:
    """Create a database gateway.

    Args:
        database_url: Full SQLAlchemy URL. Falls back to EXPENSETRACK_DATABASE_URL,
            then to a SQLite file resolved from ``database_path``
        database_path: SQLite file path used when no URL is given

    Returns:
        SQLAlchemyDatabase bound to a fresh session factory
    """
    if database_url is None:
        database_url = os.environ.get(DATABASE_URL_ENV_VAR)
    if database_url is None:
        database_url = sqlite_url(database_path)

    logger.debug("Opening database %s", database_url)
    return SQLAlchemyDatabase(database_url, create_session_factory(database_url))


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed gateway for ``database_path`` (see ``sqlite_url``)."""
    database_url = sqlite_url(database_path)
    return SQLAlchemyDatabase(database_url, create_session_factory(database_url))
