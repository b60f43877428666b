# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy-backed student directory and course catalog.

The catalog's lock() opens a transaction that holds a row lock
(SELECT ... FOR UPDATE) on the course for the whole check-then-update
section. Lookups and updates issued by the same thread inside that section
reuse the locked transaction, so the seat counter read by the service is
the one it writes back. SQLite has no row locks; its engine begins every
transaction with BEGIN IMMEDIATE (see connection.py), so the section holds
the database write lock from its first read.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import ValidationError
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from registrar.domains.enrollment.models import Course, Student
from registrar.domains.enrollment.ports import CourseCatalog, StudentDirectory
from registrar.infrastructure.database.connection import DatabaseError
from registrar.infrastructure.database.models import (
    CourseRecord,
    StudentRecord,
    completed_courses,
    course_prerequisites,
)

logger = logging.getLogger(__name__)


class CapacityConflictError(DatabaseError):
    """Raised when a course update would leave the seat counter out of range."""

    pass


class SqlStudentDirectory(StudentDirectory):
    """Student directory reading from the students table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_by_id(self, student_id: str) -> Student | None:
        """Load a student.

        Raises:
            DatabaseError: If the query fails or the stored row is not a
                valid student (for example an unknown academic status).
        """
        try:
            with self._session_factory() as session:
                record = session.get(StudentRecord, student_id)
                return Student.model_validate(record) if record is not None else None
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to load student {student_id}", e) from e
        except (ValidationError, LookupError) as e:
            raise DatabaseError(f"Stored student {student_id} is invalid", e) from e


class SqlCourseCatalog(CourseCatalog):
    """Course catalog reading and writing the courses table.

    Attributes:
        session_factory: Factory for new sessions.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory
        self._local = threading.local()

    def _locked_session(self) -> Session | None:
        return getattr(self._local, "session", None)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Yield the locked session of this thread, or a short-lived one."""
        active = self._locked_session()
        if active is not None:
            yield active
            return

        with self.session_factory() as session:
            try:
                yield session
                session.commit()
            except IntegrityError:
                session.rollback()
                raise
            except SQLAlchemyError as e:
                session.rollback()
                raise DatabaseError("Course catalog operation failed", e) from e
            except Exception:
                session.rollback()
                raise

    def find_by_code(self, course_code: str) -> Course | None:
        with self._session() as session:
            record = session.get(CourseRecord, course_code, populate_existing=True)
            return Course.model_validate(record) if record is not None else None

    def is_prerequisite_met(self, student_id: str, course_code: str) -> bool:
        completed = select(completed_courses.c.course_code).where(
            completed_courses.c.student_id == student_id
        )
        missing = (
            select(func.count())
            .select_from(course_prerequisites)
            .where(
                course_prerequisites.c.course_code == course_code,
                course_prerequisites.c.required_code.not_in(completed),
            )
        )
        with self._session() as session:
            return session.scalar(missing) == 0

    def update(self, course: Course) -> None:
        """Persist the course.

        Raises:
            CapacityConflictError: If the database rejects the seat counter.
            DatabaseError: If the course does not exist.
        """
        stmt = (
            update(CourseRecord)
            .where(CourseRecord.course_code == course.course_code)
            .values(
                course_name=course.course_name,
                capacity=course.capacity,
                enrolled_count=course.enrolled_count,
            )
        )
        try:
            with self._session() as session:
                result = session.execute(stmt)
        except IntegrityError as e:
            raise CapacityConflictError(
                f"Course {course.course_code} cannot hold "
                f"{course.enrolled_count} of {course.capacity} seats",
                e,
            ) from e

        if result.rowcount == 0:
            raise DatabaseError(f"Course {course.course_code} does not exist")

        logger.debug(
            "Persisted course %s: %d/%d",
            course.course_code,
            course.enrolled_count,
            course.capacity,
        )

    @contextmanager
    def lock(self, course_code: str) -> Iterator[None]:
        row_lock = (
            select(CourseRecord.course_code)
            .where(CourseRecord.course_code == course_code)
            .with_for_update()
        )

        active = self._locked_session()
        if active is not None:
            active.execute(row_lock)
            yield
            return

        with self.session_factory() as session:
            try:
                session.execute(row_lock)
                self._local.session = session
                try:
                    yield
                finally:
                    self._local.session = None
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise DatabaseError(f"Locked update of course {course_code} failed", e) from e
            except Exception:
                session.rollback()
                raise
