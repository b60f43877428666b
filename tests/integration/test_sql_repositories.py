# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the SQL student directory and course catalog."""

import pytest
from sqlalchemy import insert, text
from sqlalchemy.exc import IntegrityError, StatementError

from registrar.domains.enrollment.models import AcademicStatus, Course
from registrar.infrastructure.database.connection import DatabaseError
from registrar.infrastructure.database.models import StudentRecord, completed_courses
from registrar.infrastructure.database.repositories import (
    CapacityConflictError,
    SqlCourseCatalog,
    SqlStudentDirectory,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def directory(seeded_session_factory):
    """Create SQL student directory."""
    return SqlStudentDirectory(seeded_session_factory)


@pytest.fixture
def catalog(seeded_session_factory):
    """Create SQL course catalog."""
    return SqlCourseCatalog(seeded_session_factory)


class TestSqlStudentDirectory:
    """Tests for SqlStudentDirectory."""

    def test_find_by_id(self, directory):
        """Test stored students map onto the domain model."""
        student = directory.find_by_id("STU002")

        assert student.email == "suspended@test.com"
        assert student.academic_status is AcademicStatus.SUSPENDED
        assert student.gpa == pytest.approx(3.8)

    def test_find_by_id_missing(self, directory):
        """Test unknown students resolve to None."""
        assert directory.find_by_id("STU999") is None

    def test_unknown_status_rejected_by_model(self, seeded_session_factory):
        """Test the ORM refuses an academic status outside the enum."""
        with pytest.raises(StatementError):
            with seeded_session_factory.begin() as session:
                session.add(StudentRecord(student_id="S9", email="s9@test.com", academic_status="PROBATION"))

    def test_unknown_status_rejected_by_database(self, seeded_session_factory):
        """Test the students table refuses an academic status outside the enum."""
        with pytest.raises(IntegrityError):
            with seeded_session_factory.begin() as session:
                session.execute(
                    text(
                        "INSERT INTO students (student_id, email, academic_status, gpa) "
                        "VALUES ('S9', 's9@test.com', 'PROBATION', 2.0)"
                    )
                )

    def test_invalid_stored_student_wrapped(self, directory, seeded_session_factory):
        """Test a stored row the domain model rejects surfaces as DatabaseError."""
        with seeded_session_factory.begin() as session:
            session.execute(
                text(
                    "INSERT INTO students (student_id, email, academic_status, gpa) "
                    "VALUES ('', 'blank@test.com', 'ACTIVE', 2.0)"
                )
            )

        with pytest.raises(DatabaseError, match="is invalid"):
            directory.find_by_id("")


class TestSqlCourseCatalog:
    """Tests for SqlCourseCatalog."""

    def test_find_by_code(self, catalog):
        """Test stored courses map onto the domain model."""
        course = catalog.find_by_code("CS101")

        assert course.course_name == "Intro to Programming"
        assert course.capacity == 30
        assert course.enrolled_count == 10

    def test_find_by_code_missing(self, catalog):
        """Test unknown courses resolve to None."""
        assert catalog.find_by_code("CS999") is None

    def test_update(self, catalog):
        """Test update persists the seat counter."""
        course = catalog.find_by_code("CS101")
        course.enrolled_count = 11
        catalog.update(course)

        assert catalog.find_by_code("CS101").enrolled_count == 11

    def test_update_missing_course(self, catalog):
        """Test updating an unknown course fails."""
        with pytest.raises(DatabaseError):
            catalog.update(Course(course_code="CS999", capacity=5))

    def test_update_over_capacity_rejected(self, catalog):
        """Test the database refuses a seat counter above capacity."""
        overfull = Course.model_construct(
            course_code="CS101", course_name="Intro to Programming", capacity=30, enrolled_count=31,
        )

        with pytest.raises(CapacityConflictError):
            catalog.update(overfull)

        assert catalog.find_by_code("CS101").enrolled_count == 10

    def test_prerequisites(self, catalog, seeded_session_factory):
        """Test prerequisites are met once every required course is completed."""
        assert catalog.is_prerequisite_met("STU001", "CS101")
        assert not catalog.is_prerequisite_met("STU001", "CS201")

        with seeded_session_factory.begin() as session:
            session.execute(insert(completed_courses).values(student_id="STU001", course_code="MA101"))

        assert catalog.is_prerequisite_met("STU001", "CS201")

    def test_lock_commits_updates(self, catalog):
        """Test updates inside the lock are committed when it is released."""
        with catalog.lock("CS201"):
            course = catalog.find_by_code("CS201")
            course.enrolled_count += 1
            catalog.update(course)

        assert catalog.find_by_code("CS201").enrolled_count == 6

    def test_lock_rolls_back_on_error(self, catalog):
        """Test updates inside the lock are discarded when the section fails."""
        with pytest.raises(RuntimeError):
            with catalog.lock("CS201"):
                course = catalog.find_by_code("CS201")
                course.enrolled_count += 1
                catalog.update(course)
                raise RuntimeError("gate failed after write")

        assert catalog.find_by_code("CS201").enrolled_count == 5
