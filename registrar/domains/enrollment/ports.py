# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Collaborator contracts consumed by the enrollment service.

The service depends only on these abstract ports. Production adapters live
in registrar.infrastructure; tests substitute in-memory adapters or mocks
built with MagicMock(spec=...).
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from registrar.domains.enrollment.models import Course, Student


class StudentDirectory(ABC):
    """Resolves student identifiers to student records."""

    @abstractmethod
    def find_by_id(self, student_id: str) -> Student | None:
        """Look up a student.

        Args:
            student_id: Student identifier.

        Returns:
            The student, or None if the identifier does not resolve.
        """
        ...


class CourseCatalog(ABC):
    """Resolves courses, answers prerequisite queries and persists seat counts.

    Implementations must make lock() an exclusive critical section per course
    code: while one caller holds it, no other caller can read-then-write the
    same course. update() must never persist an enrolled_count outside
    0..capacity, even when called without the lock.
    """

    @abstractmethod
    def find_by_code(self, course_code: str) -> Course | None:
        """Look up a course.

        Args:
            course_code: Course code.

        Returns:
            A copy of the course, or None if the code does not resolve.
        """
        ...

    @abstractmethod
    def is_prerequisite_met(self, student_id: str, course_code: str) -> bool:
        """Check if the student satisfies the course's prerequisites."""
        ...

    @abstractmethod
    def update(self, course: Course) -> None:
        """Persist the full state of a course.

        Args:
            course: Course with its updated seat counter.
        """
        ...

    @abstractmethod
    def lock(self, course_code: str) -> AbstractContextManager[None]:
        """Open the exclusive check-then-update section for a course.

        Args:
            course_code: Course code to serialize on.

        Returns:
            Context manager held for the duration of the section.
        """
        ...


class NotificationGateway(ABC):
    """Delivers messages to students."""

    @abstractmethod
    def send_email(self, address: str, subject: str, body: str) -> None:
        """Send an email.

        Args:
            address: Recipient address.
            subject: Subject line.
            body: Plain text body.
        """
        ...


class CreditPolicy(ABC):
    """Maps a GPA to the maximum credit load a student may carry."""

    @abstractmethod
    def calculate_max_credits(self, gpa: float) -> int:
        """Compute the credit cap for a GPA."""
        ...
