# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the registrar database.

Tables:
    students: Student identity, contact and academic standing.
    courses: Course offerings with capacity and seat counter.
    course_prerequisites: Required course codes per course.
    completed_courses: Courses each student has completed.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Table,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from registrar.domains.enrollment.models import AcademicStatus


class Base(DeclarativeBase):
    """Declarative base for registrar models."""

    pass


course_prerequisites = Table(
    "course_prerequisites",
    Base.metadata,
    Column("course_code", String(32), ForeignKey("courses.course_code"), primary_key=True),
    Column("required_code", String(32), ForeignKey("courses.course_code"), primary_key=True),
)

completed_courses = Table(
    "completed_courses",
    Base.metadata,
    Column("student_id", String(64), ForeignKey("students.student_id"), primary_key=True),
    Column("course_code", String(32), ForeignKey("courses.course_code"), primary_key=True),
    Column("completed_at", DateTime(timezone=True), server_default=func.now()),
)


class StudentRecord(Base):
    """Persisted student."""

    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("gpa >= 0.0 AND gpa <= 4.0", name="ck_students_gpa_range"),
    )

    student_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    academic_status: Mapped[AcademicStatus] = mapped_column(
        Enum(
            AcademicStatus,
            name="academic_status",
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            length=20,
        ),
        nullable=False,
        default=AcademicStatus.ACTIVE,
    )
    gpa: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)


class CourseRecord(Base):
    """Persisted course offering."""

    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_courses_capacity_positive"),
        CheckConstraint(
            "enrolled_count >= 0 AND enrolled_count <= capacity",
            name="ck_courses_enrolled_within_capacity",
        ),
    )

    course_code: Mapped[str] = mapped_column(String(32), primary_key=True)
    course_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    enrolled_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
