# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides course registration rules including:
- Student registration in course offerings
- Course withdrawal
- Credit-load validation
"""

from registrar.domains.enrollment.credit_policy import TieredCreditPolicy
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
from registrar.domains.enrollment.service import (
    CourseFullError,
    CourseNotFoundError,
    EnrollmentNotPermittedError,
    EnrollmentService,
    EnrollmentServiceError,
    PrerequisiteNotMetError,
    StudentNotFoundError,
)

__all__ = [
    # Service
    "EnrollmentService",
    "EnrollmentServiceError",
    "StudentNotFoundError",
    "CourseNotFoundError",
    "EnrollmentNotPermittedError",
    "CourseFullError",
    "PrerequisiteNotMetError",
    # Models
    "AcademicStatus",
    "EnrollmentStatus",
    "Student",
    "Course",
    "Enrollment",
    # Ports
    "StudentDirectory",
    "CourseCatalog",
    "NotificationGateway",
    "CreditPolicy",
    # Policies
    "TieredCreditPolicy",
]
