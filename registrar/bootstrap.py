# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Wiring of the enrollment service from configuration.

Example:
    >>> from registrar.bootstrap import build_enrollment_service
    >>> service = build_enrollment_service()
    >>> enrollment = service.enroll_course("STU001", "CS101")
"""

import logging

from registrar.core.config.settings import Settings, get_settings
from registrar.domains.enrollment.credit_policy import TieredCreditPolicy
from registrar.domains.enrollment.ports import NotificationGateway
from registrar.domains.enrollment.service import EnrollmentService
from registrar.infrastructure.database.connection import (
    create_schema,
    get_engine,
    get_sessionmaker,
    init_database,
)
from registrar.infrastructure.database.repositories import (
    SqlCourseCatalog,
    SqlStudentDirectory,
)
from registrar.infrastructure.memory import RecordingNotificationGateway
from registrar.infrastructure.notifications.email import SmtpNotificationGateway
from registrar.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_notification_gateway(settings: Settings) -> NotificationGateway:
    """Choose the notification gateway for the environment.

    The test environment records messages instead of sending them.
    """
    if settings.environment == "test":
        return RecordingNotificationGateway()
    return SmtpNotificationGateway(settings.smtp)


def build_enrollment_service(
    settings: Settings | None = None,
    create_tables: bool = False,
) -> EnrollmentService:
    """Build an EnrollmentService backed by the configured database.

    Args:
        settings: Application settings; defaults to get_settings().
        create_tables: Create missing tables before returning.

    Returns:
        Fully wired EnrollmentService.

    Raises:
        DatabaseError: If the database cannot be initialized.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    init_database(settings)
    if create_tables:
        create_schema(get_engine())

    session_factory = get_sessionmaker()

    logger.info(
        "Enrollment service configured: environment=%s, smtp=%s",
        settings.environment,
        "enabled" if settings.smtp.is_configured else "disabled",
    )

    return EnrollmentService(
        student_directory=SqlStudentDirectory(session_factory),
        course_catalog=SqlCourseCatalog(session_factory),
        notification_gateway=build_notification_gateway(settings),
        credit_policy=TieredCreditPolicy.from_settings(settings.credit_policy),
    )
