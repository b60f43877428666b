# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-memory enrollment adapters.

Thread-safe implementations of the enrollment ports for development,
demos and tests. Stored records are copied on the way in and out so a
caller mutating a returned course never changes stored state without
going through update().

Example:
    >>> catalog = InMemoryCourseCatalog()
    >>> catalog.add(Course(course_code="CS101", course_name="Intro", capacity=30))
    >>> catalog.add_prerequisite("CS201", "CS101")
    >>> catalog.record_completion("STU001", "CS101")
    >>> catalog.is_prerequisite_met("STU001", "CS201")
    True
"""

import logging
import threading
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from dataclasses import dataclass, field
from datetime import datetime

from registrar.domains.enrollment.models import Course, Student
from registrar.domains.enrollment.ports import (
    CourseCatalog,
    NotificationGateway,
    StudentDirectory,
)
from registrar.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class InMemoryStudentDirectory(StudentDirectory):
    """Student directory backed by a dictionary."""

    def __init__(self, students: list[Student] | None = None) -> None:
        self._students: dict[str, Student] = {}
        self._lock = threading.Lock()
        for student in students or []:
            self.add(student)

    def add(self, student: Student) -> None:
        """Register or replace a student."""
        with self._lock:
            self._students[student.student_id] = student

    def find_by_id(self, student_id: str) -> Student | None:
        with self._lock:
            return self._students.get(student_id)


class InMemoryCourseCatalog(CourseCatalog):
    """Course catalog backed by dictionaries with one lock per course.

    Prerequisites are modeled as a set of required course codes per course;
    a student meets them once every required course is recorded as
    completed for that student.
    """

    def __init__(self, courses: list[Course] | None = None) -> None:
        self._courses: dict[str, Course] = {}
        self._prerequisites: dict[str, set[str]] = defaultdict(set)
        self._completed: dict[str, set[str]] = defaultdict(set)
        self._course_locks: dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()
        for course in courses or []:
            self.add(course)

    def add(self, course: Course) -> None:
        """Register or replace a course."""
        with self._registry_lock:
            self._courses[course.course_code] = course.model_copy()

    def add_prerequisite(self, course_code: str, required_code: str) -> None:
        """Require completion of required_code before course_code."""
        with self._registry_lock:
            self._prerequisites[course_code].add(required_code)

    def record_completion(self, student_id: str, course_code: str) -> None:
        """Mark a course as completed by a student."""
        with self._registry_lock:
            self._completed[student_id].add(course_code)

    def find_by_code(self, course_code: str) -> Course | None:
        with self._registry_lock:
            course = self._courses.get(course_code)
            return course.model_copy() if course is not None else None

    def is_prerequisite_met(self, student_id: str, course_code: str) -> bool:
        with self._registry_lock:
            required = self._prerequisites.get(course_code, set())
            return required <= self._completed.get(student_id, set())

    def update(self, course: Course) -> None:
        """Store the course state.

        Raises:
            KeyError: If the course was never added.
        """
        with self._registry_lock:
            if course.course_code not in self._courses:
                raise KeyError(f"Course {course.course_code} is not in the catalog")
            # Re-validate so a bypassed invariant never reaches storage
            self._courses[course.course_code] = Course.model_validate(course.model_dump())

    @contextmanager
    def lock(self, course_code: str) -> Iterator[None]:
        """Hold the course lock; unknown codes get no lock of their own."""
        with self._registry_lock:
            if course_code in self._courses:
                course_lock = self._course_locks.setdefault(course_code, threading.RLock())
            else:
                course_lock = nullcontext()
        with course_lock:
            yield


@dataclass(frozen=True)
class SentEmail:
    """Email captured by RecordingNotificationGateway."""

    address: str
    subject: str
    body: str
    sent_at: datetime = field(default_factory=utc_now)


class RecordingNotificationGateway(NotificationGateway):
    """Notification gateway that keeps every message in an outbox.

    Used when no SMTP server is configured, and by tests to assert on the
    messages a workflow produced.
    """

    def __init__(self) -> None:
        self._outbox: list[SentEmail] = []
        self._lock = threading.Lock()

    @property
    def outbox(self) -> list[SentEmail]:
        """Snapshot of the messages sent so far."""
        with self._lock:
            return list(self._outbox)

    def send_email(self, address: str, subject: str, body: str) -> None:
        with self._lock:
            self._outbox.append(SentEmail(address=address, subject=subject, body=body))
        logger.info("Recorded email to %s: %s", address, subject)

    def clear(self) -> None:
        """Empty the outbox."""
        with self._lock:
            self._outbox.clear()
