# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Data models for the enrollment domain.

This module defines Pydantic models and enums for:
- Student academic standing
- Course offerings and their seat counters
- Enrollment results returned to callers

Students are read-only snapshots owned by the student directory. Courses
are mutable: the service changes the seat counter in memory and hands the
course back to the catalog for persistence.
"""

from datetime import datetime
from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from registrar.utils.datetime import utc_now


class AcademicStatus(str, Enum):
    """Academic standing of a student.

    Only ACTIVE students may register for courses.
    """

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    GRADUATED = "GRADUATED"
    LEAVE = "LEAVE"


class EnrollmentStatus(str, Enum):
    """Status of an enrollment created by the service."""

    APPROVED = "APPROVED"


class Student(BaseModel):
    """Student snapshot as resolved by the student directory."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    student_id: str = Field(min_length=1)
    email: str = ""
    academic_status: AcademicStatus = AcademicStatus.ACTIVE
    gpa: float = Field(default=0.0, ge=0.0, le=4.0)

    @property
    def is_active(self) -> bool:
        """Check if the student is allowed to register."""
        return self.academic_status == AcademicStatus.ACTIVE


class Course(BaseModel):
    """Course offering with its seat counter.

    The invariant 0 <= enrolled_count <= capacity is validated on
    construction and on every assignment.
    """

    model_config = ConfigDict(validate_assignment=True, from_attributes=True)

    course_code: str = Field(min_length=1)
    course_name: str = ""
    capacity: int = Field(gt=0)
    enrolled_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_capacity(self) -> Self:
        """Reject seat counts above capacity.

        Raises:
            ValueError: If enrolled_count exceeds capacity.
        """
        if self.enrolled_count > self.capacity:
            raise ValueError(
                f"enrolled_count {self.enrolled_count} exceeds capacity {self.capacity}"
            )
        return self

    @property
    def is_full(self) -> bool:
        """Check if every seat is taken."""
        return self.enrolled_count >= self.capacity

    @property
    def available_seats(self) -> int:
        """Number of seats still open."""
        return self.capacity - self.enrolled_count


class Enrollment(BaseModel):
    """Result of a successful registration."""

    model_config = ConfigDict(frozen=True)

    student_id: str
    course_code: str
    status: EnrollmentStatus = EnrollmentStatus.APPROVED
    created_at: datetime = Field(default_factory=utc_now)
