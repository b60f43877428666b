# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Email notification gateway using async SMTP.

This gateway sends enrollment and drop confirmations using aiosmtplib.
The enrollment workflows are synchronous, so each send is driven to
completion on the calling thread's event loop via run_async().

Configuration (via environment variables):
- SMTP_HOST: SMTP server hostname
- SMTP_PORT: SMTP server port (default: 587)
- SMTP_USERNAME: SMTP authentication username
- SMTP_PASSWORD: SMTP authentication password
- SMTP_USE_TLS: Use STARTTLS (default: true)
- SMTP_FROM_EMAIL: Sender email address
- SMTP_FROM_NAME: Sender display name
"""

import html
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid

import aiosmtplib

from registrar.core.config.settings import SMTPSettings
from registrar.domains.enrollment.ports import NotificationGateway
from registrar.utils.async_bridge import run_async

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the SMTP server rejects or fails a delivery.

    Attributes:
        address: Recipient address.
        original_error: The underlying aiosmtplib error.
    """

    def __init__(self, address: str, original_error: Exception) -> None:
        super().__init__(f"Failed to send email to {address}: {original_error}")
        self.address = address
        self.original_error = original_error


class SmtpNotificationGateway(NotificationGateway):
    """Notification gateway delivering over SMTP.

    When SMTP is not configured, sends are logged and skipped so local
    development works without a mail server.
    """

    def __init__(self, settings: SMTPSettings) -> None:
        """Initialize the gateway.

        Args:
            settings: SMTP configuration.
        """
        self.settings = settings
        if not settings.is_configured:
            logger.warning(
                "Email notifications disabled: SMTP_HOST, SMTP_USERNAME, "
                "SMTP_PASSWORD, or SMTP_FROM_EMAIL not set"
            )

    def send_email(self, address: str, subject: str, body: str) -> None:
        """Send an email via SMTP.

        Raises:
            EmailDeliveryError: If the SMTP exchange fails.
        """
        if not self.settings.is_configured:
            logger.info("Skipped email to %s (SMTP not configured): %s", address, subject)
            return

        if not address:
            logger.warning("Skipped email without recipient: %s", subject)
            return

        message = self._build_email_message(address, subject, body)
        password = self.settings.password.get_secret_value() if self.settings.password else None

        try:
            run_async(
                aiosmtplib.send(
                    message,
                    hostname=self.settings.host,
                    port=self.settings.port,
                    username=self.settings.username,
                    password=password,
                    start_tls=self.settings.use_tls,
                    timeout=self.settings.timeout,
                )
            )
        except aiosmtplib.SMTPException as e:
            logger.error("Failed to send email to %s: %s", address, str(e), exc_info=True)
            raise EmailDeliveryError(address, e) from e

        logger.info("Email sent to %s: %s", address, subject)

    def _build_email_message(self, address: str, subject: str, body: str) -> MIMEMultipart:
        """Build MIME email message with plain text and HTML parts.

        Args:
            address: Recipient address.
            subject: Subject line.
            body: Plain text body.

        Returns:
            MIMEMultipart message ready to send.
        """
        message = MIMEMultipart("alternative")

        message["From"] = f"{self.settings.from_name} <{self.settings.from_email}>"
        message["To"] = address
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()

        text_content = "\n".join([
            subject,
            "=" * len(subject),
            "",
            body,
            "",
            "---",
            f"This notification was sent by {self.settings.from_name}.",
        ])
        message.attach(MIMEText(text_content, "plain", "utf-8"))
        message.attach(MIMEText(self._build_html(subject, body), "html", "utf-8"))

        return message

    def _build_html(self, subject: str, body: str) -> str:
        title = html.escape(subject)
        content = html.escape(body).replace("\n", "<br>")
        sender = html.escape(self.settings.from_name)

        return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #1F2937;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h1 style="color: #4F46E5; font-size: 22px;">{title}</h1>
        <p>{content}</p>
        <p style="border-top: 1px solid #E5E7EB; padding-top: 12px;
                  font-size: 12px; color: #9CA3AF;">
            This notification was sent by {sender}.
        </p>
    </div>
</body>
</html>
        """.strip()
