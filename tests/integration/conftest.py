# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for database integration tests.

Provides a file-backed SQLite engine with the registrar schema and seeded
students, courses and coursework.
"""

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine, insert
from sqlalchemy.orm import Session, sessionmaker

from registrar.core.config.settings import DatabaseSettings
from registrar.infrastructure.database.connection import (
    create_database_engine,
    create_schema,
    create_session_factory,
)
from registrar.infrastructure.database.models import (
    Base,
    CourseRecord,
    StudentRecord,
    completed_courses,
    course_prerequisites,
)


@pytest.fixture
def database_url(tmp_path) -> str:
    """Get a throwaway SQLite database URL."""
    return f"sqlite:///{tmp_path / 'registrar_test.db'}"


@pytest.fixture
def db_engine(database_url: str) -> Iterator[Engine]:
    """Create engine with a fresh schema."""
    engine = create_database_engine(DatabaseSettings(url=database_url))
    create_schema(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(db_engine: Engine) -> sessionmaker[Session]:
    """Create the session factory the SQL adapters use."""
    return create_session_factory(db_engine)


def seed_registrar_data(factory: sessionmaker[Session]) -> None:
    """Insert the students, courses and coursework used by the tests."""
    with factory.begin() as session:
        session.add_all([
            StudentRecord(student_id="STU001", email="student@test.com", academic_status="ACTIVE", gpa=3.0),
            StudentRecord(student_id="STU002", email="suspended@test.com", academic_status="SUSPENDED", gpa=3.8),
            CourseRecord(course_code="CS101", course_name="Intro to Programming", capacity=30, enrolled_count=10),
            CourseRecord(course_code="CS201", course_name="Data Structures", capacity=25, enrolled_count=5),
            CourseRecord(course_code="MA101", course_name="Calculus I", capacity=10, enrolled_count=10),
        ])
        session.flush()
        session.execute(
            insert(course_prerequisites),
            [
                {"course_code": "CS201", "required_code": "CS101"},
                {"course_code": "CS201", "required_code": "MA101"},
            ],
        )
        session.execute(
            insert(completed_courses),
            [{"student_id": "STU001", "course_code": "CS101"}],
        )


@pytest.fixture
def seeded_session_factory(session_factory: sessionmaker[Session]) -> sessionmaker[Session]:
    """Create a session factory over seeded data."""
    seed_registrar_data(session_factory)
    return session_factory
