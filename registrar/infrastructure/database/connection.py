# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database connection management using SQLAlchemy.

This module provides the engine and sessions for the registrar database,
which holds students, courses, prerequisites and completed coursework.

Uses the SQLAlchemy 2.0 API. The enrollment workflows are synchronous, so
the engine is synchronous too.

Example:
    from registrar.infrastructure.database.connection import (
        init_database,
        get_session,
    )

    # Initialize at application startup
    init_database(settings)

    with get_session() as session:
        result = session.execute(select(CourseRecord))
        courses = result.scalars().all()
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from registrar.infrastructure.database.models import Base

if TYPE_CHECKING:
    from registrar.core.config.settings import DatabaseSettings, Settings

# Module-level state for the database connection
_engine: Optional[Engine] = None
_sessionmaker: Optional[sessionmaker[Session]] = None


class DatabaseError(Exception):
    """Base exception for database operations.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize the database error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


def _begin_immediate_on_sqlite(engine: Engine) -> None:
    """Make every SQLite transaction take the write lock when it begins.

    pysqlite defers BEGIN until the first write, so two connections can
    read the same seat counter before either writes. SQLite ignores
    SELECT ... FOR UPDATE, so the lock is taken by BEGIN IMMEDIATE instead.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(connection) -> None:
        connection.exec_driver_sql("BEGIN IMMEDIATE")


def create_database_engine(settings: "DatabaseSettings") -> Engine:
    """Create the engine for the configured database.

    Args:
        settings: Database configuration.

    Returns:
        Engine; on SQLite every transaction begins with BEGIN IMMEDIATE.
    """
    connect_args = {"timeout": settings.sqlite_timeout} if settings.is_sqlite else {}
    engine = create_engine(
        settings.url,
        pool_pre_ping=settings.pool_pre_ping,
        echo=settings.echo,
        connect_args=connect_args,
    )
    if settings.is_sqlite:
        _begin_immediate_on_sqlite(engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Build the session factory used by the SQL adapters.

    Args:
        engine: Engine to bind sessions to.

    Returns:
        Session factory with expire_on_commit disabled.
    """
    return sessionmaker(
        bind=engine,
        class_=Session,
        expire_on_commit=False,
        autoflush=False,
    )


def init_database(settings: "Settings") -> None:
    """Initialize the database connection pool.

    Args:
        settings: Application settings containing database configuration.

    Raises:
        DatabaseError: If engine creation fails.
    """
    global _engine, _sessionmaker

    try:
        _engine = create_database_engine(settings.database)
        _sessionmaker = create_session_factory(_engine)
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to initialize database connection", e) from e


def close_database() -> None:
    """Dispose of the connection pool."""
    global _engine, _sessionmaker

    if _engine is not None:
        _engine.dispose()
        _engine = None
        _sessionmaker = None


def get_engine() -> Engine:
    """Get the database engine.

    Raises:
        DatabaseError: If the database has not been initialized.
    """
    if _engine is None:
        raise DatabaseError("Database not initialized. Call init_database() first.")
    return _engine


def get_sessionmaker() -> sessionmaker[Session]:
    """Get the database sessionmaker.

    Raises:
        DatabaseError: If the database has not been initialized.
    """
    if _sessionmaker is None:
        raise DatabaseError("Database not initialized. Call init_database() first.")
    return _sessionmaker


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a session that commits on success and rolls back on exception.

    Yields:
        Session for database operations.

    Raises:
        DatabaseError: If the database has not been initialized or
            if a database operation fails.
    """
    factory = get_sessionmaker()

    with factory() as session:
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise DatabaseError("Database operation failed", e) from e
        except Exception:
            session.rollback()
            raise


def create_schema(engine: Engine) -> None:
    """Create every registrar table that does not exist yet."""
    Base.metadata.create_all(engine)


def check_database_connection() -> bool:
    """Check if the database is reachable.

    Returns:
        True if the database is reachable, False otherwise.
    """
    if _engine is None:
        return False

    try:
        with _engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False
