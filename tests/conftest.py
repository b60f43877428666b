# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Iterator

import pytest

from registrar.core.config.settings import clear_settings_cache
from registrar.domains.enrollment.models import AcademicStatus, Course, Student
from registrar.infrastructure.memory import (
    InMemoryCourseCatalog,
    InMemoryStudentDirectory,
    RecordingNotificationGateway,
)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Iterator[None]:
    """Drop cached settings between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (requires services)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_student() -> Student:
    """Provide an active student."""
    return Student(
        student_id="STU001",
        email="student@test.com",
        academic_status=AcademicStatus.ACTIVE,
        gpa=3.0,
    )


@pytest.fixture
def sample_course() -> Course:
    """Provide a course with open seats."""
    return Course(
        course_code="CS101",
        course_name="Intro to Programming",
        capacity=30,
        enrolled_count=10,
    )


@pytest.fixture
def student_directory(sample_student: Student) -> InMemoryStudentDirectory:
    """Provide a directory containing the sample student."""
    return InMemoryStudentDirectory([sample_student])


@pytest.fixture
def course_catalog(sample_course: Course) -> InMemoryCourseCatalog:
    """Provide a catalog containing the sample course."""
    return InMemoryCourseCatalog([sample_course])


@pytest.fixture
def outbox() -> RecordingNotificationGateway:
    """Provide a gateway that records sent emails."""
    return RecordingNotificationGateway()
