# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database package for Registrar.

Provides:
- Engine and session management (connection)
- ORM models for students, courses and coursework (models)
- SQL implementations of the student directory and course catalog
  (repositories)
"""

from registrar.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    create_database_engine,
    create_schema,
    create_session_factory,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)
from registrar.infrastructure.database.models import (
    Base,
    CourseRecord,
    StudentRecord,
    completed_courses,
    course_prerequisites,
)
from registrar.infrastructure.database.repositories import (
    CapacityConflictError,
    SqlCourseCatalog,
    SqlStudentDirectory,
)

__all__ = [
    # Connection
    "DatabaseError",
    "create_database_engine",
    "init_database",
    "close_database",
    "get_engine",
    "get_sessionmaker",
    "get_session",
    "create_session_factory",
    "create_schema",
    "check_database_connection",
    # Models
    "Base",
    "StudentRecord",
    "CourseRecord",
    "course_prerequisites",
    "completed_courses",
    # Repositories
    "SqlStudentDirectory",
    "SqlCourseCatalog",
    "CapacityConflictError",
]
