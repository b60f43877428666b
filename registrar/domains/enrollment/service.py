# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for course registration and withdrawal.

This module provides the EnrollmentService class for:
- Registering a student in a course offering
- Dropping a student from a course offering
- Checking a requested credit load against the student's GPA-based cap

Registration runs a fixed chain of gates. The student gates run before any
course lookup, so a suspended student is rejected even for an unknown
course. Seat changes, persistence and notification only happen after every
gate has passed.
"""

from __future__ import annotations

import logging

from registrar.domains.enrollment.models import (
    AcademicStatus,
    Course,
    Enrollment,
    EnrollmentStatus,
    Student,
)
from registrar.domains.enrollment.ports import (
    CourseCatalog,
    CreditPolicy,
    NotificationGateway,
    StudentDirectory,
)
from registrar.utils.datetime import utc_now
from registrar.utils.logging import log_context

logger = logging.getLogger(__name__)

ENROLLMENT_CONFIRMATION_SUBJECT = "Enrollment Confirmation"
DROP_CONFIRMATION_SUBJECT = "Drop Confirmation"


class EnrollmentServiceError(Exception):
    """Base exception for enrollment service errors."""

    pass


class StudentNotFoundError(EnrollmentServiceError):
    """Raised when a student identifier does not resolve."""

    def __init__(self, student_id: str) -> None:
        super().__init__(f"Student {student_id} not found")
        self.student_id = student_id


class CourseNotFoundError(EnrollmentServiceError):
    """Raised when a course code does not resolve."""

    def __init__(self, course_code: str) -> None:
        super().__init__(f"Course {course_code} not found")
        self.course_code = course_code


class EnrollmentNotPermittedError(EnrollmentServiceError):
    """Raised when the student's academic status forbids registration."""

    def __init__(self, student_id: str, academic_status: AcademicStatus) -> None:
        super().__init__(
            f"Student {student_id} cannot enroll with academic status "
            f"{academic_status.value}"
        )
        self.student_id = student_id
        self.academic_status = academic_status


class CourseFullError(EnrollmentServiceError):
    """Raised when every seat of the course is taken."""

    def __init__(self, course_code: str, capacity: int) -> None:
        super().__init__(f"Course {course_code} is full (capacity {capacity})")
        self.course_code = course_code
        self.capacity = capacity


class PrerequisiteNotMetError(EnrollmentServiceError):
    """Raised when the student has not satisfied the course prerequisites."""

    def __init__(self, student_id: str, course_code: str) -> None:
        super().__init__(
            f"Student {student_id} has not met prerequisites for {course_code}"
        )
        self.student_id = student_id
        self.course_code = course_code


class EnrollmentService:
    """Service for course registration rules.

    Attributes:
        student_directory: Student lookup port.
        course_catalog: Course lookup, prerequisite and persistence port.
        notification_gateway: Email delivery port.
        credit_policy: GPA-to-credit-cap port.
    """

    def __init__(
        self,
        student_directory: StudentDirectory,
        course_catalog: CourseCatalog,
        notification_gateway: NotificationGateway,
        credit_policy: CreditPolicy,
    ) -> None:
        """Initialize enrollment service.

        Args:
            student_directory: Resolves students.
            course_catalog: Resolves and persists courses.
            notification_gateway: Sends confirmation emails.
            credit_policy: Computes credit caps.
        """
        self.student_directory = student_directory
        self.course_catalog = course_catalog
        self.notification_gateway = notification_gateway
        self.credit_policy = credit_policy

    def enroll_course(self, student_id: str, course_code: str) -> Enrollment:
        """Register a student in a course.

        Args:
            student_id: Student identifier.
            course_code: Course code.

        Returns:
            The approved enrollment.

        Raises:
            StudentNotFoundError: If student not found.
            EnrollmentNotPermittedError: If student is not ACTIVE.
            CourseNotFoundError: If course not found.
            CourseFullError: If the course has no open seat.
            PrerequisiteNotMetError: If prerequisites are not satisfied.
        """
        with log_context(student_id=student_id, course_code=course_code):
            return self._enroll(student_id, course_code)

    def _enroll(self, student_id: str, course_code: str) -> Enrollment:
        student = self._get_student(student_id)

        if not student.is_active:
            logger.info(
                "Enrollment rejected: student=%s, course=%s, status=%s",
                student_id,
                course_code,
                student.academic_status.value,
            )
            raise EnrollmentNotPermittedError(student_id, student.academic_status)

        with self.course_catalog.lock(course_code):
            course = self._get_course(course_code)

            if course.is_full:
                logger.info(
                    "Enrollment rejected: student=%s, course=%s, full at %d",
                    student_id,
                    course_code,
                    course.capacity,
                )
                raise CourseFullError(course_code, course.capacity)

            if not self.course_catalog.is_prerequisite_met(student_id, course_code):
                logger.info(
                    "Enrollment rejected: student=%s, course=%s, prerequisites not met",
                    student_id,
                    course_code,
                )
                raise PrerequisiteNotMetError(student_id, course_code)

            course.enrolled_count += 1
            self.course_catalog.update(course)

        enrollment = Enrollment(
            student_id=student_id,
            course_code=course_code,
            status=EnrollmentStatus.APPROVED,
            created_at=utc_now(),
        )

        self.notification_gateway.send_email(
            student.email,
            f"{ENROLLMENT_CONFIRMATION_SUBJECT}: {course.course_name}",
            f"You have been enrolled in {course.course_name} ({course.course_code}).",
        )

        logger.info(
            "Enrolled student: student=%s, course=%s, seats=%d/%d",
            student_id,
            course_code,
            course.enrolled_count,
            course.capacity,
        )

        return enrollment

    def drop_course(self, student_id: str, course_code: str) -> None:
        """Withdraw a student from a course.

        The seat counter never goes below zero. No enrollment record is
        consulted: dropping a course the student never took still frees a
        seat if one is taken.

        Args:
            student_id: Student identifier.
            course_code: Course code.

        Raises:
            StudentNotFoundError: If student not found.
            CourseNotFoundError: If course not found.
        """
        with log_context(student_id=student_id, course_code=course_code):
            self._drop(student_id, course_code)

    def _drop(self, student_id: str, course_code: str) -> None:
        student = self._get_student(student_id)

        with self.course_catalog.lock(course_code):
            course = self._get_course(course_code)

            if course.enrolled_count == 0:
                logger.warning(
                    "Drop on empty course: student=%s, course=%s",
                    student_id,
                    course_code,
                )
            course.enrolled_count = max(course.enrolled_count - 1, 0)
            self.course_catalog.update(course)

        self.notification_gateway.send_email(
            student.email,
            f"{DROP_CONFIRMATION_SUBJECT}: {course.course_name}",
            f"You have been dropped from {course.course_name} ({course.course_code}).",
        )

        logger.info(
            "Dropped student: student=%s, course=%s, seats=%d/%d",
            student_id,
            course_code,
            course.enrolled_count,
            course.capacity,
        )

    def validate_credit_limit(self, student_id: str, requested_credits: int) -> bool:
        """Check a requested credit load against the student's cap.

        Args:
            student_id: Student identifier.
            requested_credits: Credits the student wants to carry.

        Returns:
            True if requested_credits does not exceed the cap.

        Raises:
            StudentNotFoundError: If student not found.
        """
        student = self._get_student(student_id)
        max_credits = self.credit_policy.calculate_max_credits(student.gpa)

        logger.debug(
            "Credit limit check: student=%s, requested=%d, max=%d",
            student_id,
            requested_credits,
            max_credits,
        )

        return requested_credits <= max_credits

    def _get_student(self, student_id: str) -> Student:
        """Get student by ID.

        Raises:
            StudentNotFoundError: If not found.
        """
        student = self.student_directory.find_by_id(student_id)
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    def _get_course(self, course_code: str) -> Course:
        """Get course by code.

        Raises:
            CourseNotFoundError: If not found.
        """
        course = self.course_catalog.find_by_code(course_code)
        if course is None:
            raise CourseNotFoundError(course_code)
        return course
