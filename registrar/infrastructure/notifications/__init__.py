# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification delivery for Registrar.

Usage:
    from registrar.infrastructure.notifications import SmtpNotificationGateway

    gateway = SmtpNotificationGateway(get_settings().smtp)
    gateway.send_email("student@example.edu", "Enrollment Confirmation", "...")
"""

from registrar.infrastructure.notifications.email import (
    EmailDeliveryError,
    SmtpNotificationGateway,
)

__all__ = [
    "EmailDeliveryError",
    "SmtpNotificationGateway",
]
