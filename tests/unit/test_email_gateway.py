# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the SMTP notification gateway."""

from unittest.mock import AsyncMock, patch

import aiosmtplib
import pytest

from registrar.core.config.settings import SMTPSettings
from registrar.infrastructure.notifications.email import (
    EmailDeliveryError,
    SmtpNotificationGateway,
)


@pytest.fixture
def smtp_settings():
    """Create complete SMTP settings."""
    return SMTPSettings(
        host="smtp.example.edu",
        port=2525,
        username="registrar",
        password="secret",
        from_email="registrar@example.edu",
        from_name="Registrar Office",
    )


@pytest.fixture
def gateway(smtp_settings):
    """Create a configured gateway."""
    return SmtpNotificationGateway(smtp_settings)


class TestSmtpNotificationGateway:
    """Tests for SmtpNotificationGateway."""

    def test_send_email(self, gateway):
        """Test a configured gateway delivers through aiosmtplib."""
        with patch(
            "registrar.infrastructure.notifications.email.aiosmtplib.send",
            new_callable=AsyncMock,
        ) as mock_send:
            gateway.send_email(
                "student@test.com",
                "Enrollment Confirmation: Intro to Programming",
                "You have been enrolled in Intro to Programming (CS101).",
            )

        mock_send.assert_awaited_once()
        message = mock_send.call_args.args[0]
        kwargs = mock_send.call_args.kwargs
        assert message["To"] == "student@test.com"
        assert message["Subject"] == "Enrollment Confirmation: Intro to Programming"
        assert message["From"] == "Registrar Office <registrar@example.edu>"
        assert kwargs["hostname"] == "smtp.example.edu"
        assert kwargs["port"] == 2525
        assert kwargs["password"] == "secret"
        assert kwargs["start_tls"] is True

    def test_message_has_text_and_html_parts(self, gateway):
        """Test the message carries plain text and escaped HTML bodies."""
        message = gateway._build_email_message("student@test.com", "Drop <Confirmation>", "Body & more")

        parts = message.get_payload()
        assert [part.get_content_type() for part in parts] == ["text/plain", "text/html"]
        assert "Body & more" in parts[0].get_payload(decode=True).decode("utf-8")
        html_body = parts[1].get_payload(decode=True).decode("utf-8")
        assert "Body &amp; more" in html_body
        assert "Drop &lt;Confirmation&gt;" in html_body

    def test_smtp_failure_raises(self, gateway):
        """Test SMTP errors surface as EmailDeliveryError."""
        with patch(
            "registrar.infrastructure.notifications.email.aiosmtplib.send",
            new_callable=AsyncMock,
            side_effect=aiosmtplib.SMTPException("relay denied"),
        ):
            with pytest.raises(EmailDeliveryError) as exc_info:
                gateway.send_email("student@test.com", "Subject", "Body")

        assert exc_info.value.address == "student@test.com"
        assert isinstance(exc_info.value.original_error, aiosmtplib.SMTPException)

    def test_unconfigured_gateway_skips(self):
        """Test nothing is sent when SMTP is not configured."""
        gateway = SmtpNotificationGateway(SMTPSettings(host=None))

        with patch(
            "registrar.infrastructure.notifications.email.aiosmtplib.send",
            new_callable=AsyncMock,
        ) as mock_send:
            gateway.send_email("student@test.com", "Subject", "Body")

        mock_send.assert_not_awaited()

    def test_missing_recipient_skips(self, gateway):
        """Test nothing is sent without a recipient address."""
        with patch(
            "registrar.infrastructure.notifications.email.aiosmtplib.send",
            new_callable=AsyncMock,
        ) as mock_send:
            gateway.send_email("", "Subject", "Body")

        mock_send.assert_not_awaited()
