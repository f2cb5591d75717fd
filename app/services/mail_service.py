"""
Outbound customer email over SMTP.

Sends are blocking ``smtplib`` calls pushed to a worker thread. When no SMTP
host is configured the message is logged and dropped, which keeps local
development and tests free of a mail relay.
"""

import asyncio
import logging
import smtplib
import ssl
from datetime import date
from email.mime.text import MIMEText

from app.core.config import settings

logger = logging.getLogger(__name__)


class MailService:
    """Confirmation and cancellation notices for bookings."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        sender: str | None = None,
    ):
        self.host = host if host is not None else settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.username = username if username is not None else settings.SMTP_USERNAME
        self.password = password if password is not None else settings.SMTP_PASSWORD
        self.sender = sender or settings.MAIL_FROM

    @property
    def enabled(self) -> bool:
        return bool(self.host)

    async def send_booking_confirmation(
        self,
        to_email: str | None,
        customer_name: str,
        booking_date: date,
        preferred_time: str,
        address: str,
        service_type: str,
    ) -> bool:
        subject = f"{settings.APP_NAME}: booking received for {booking_date.isoformat()}"
        body = (
            f"Hi {customer_name},\n\n"
            f"We've received your {service_type} booking.\n\n"
            f"Date: {booking_date.isoformat()}\n"
            f"Time: {preferred_time}\n"
            f"Address: {address}\n\n"
            "Your booking is pending approval. We'll let you know once it is confirmed.\n\n"
            f"The {settings.APP_NAME} team"
        )
        return await self.send(to_email, subject, body)

    async def send_cancellation_notice(
        self,
        to_email: str | None,
        customer_name: str,
        booking_date: date,
        service_type: str,
    ) -> bool:
        subject = f"{settings.APP_NAME}: booking cancelled"
        body = (
            f"Hi {customer_name},\n\n"
            f"Your {service_type} booking on {booking_date.isoformat()} has been cancelled.\n\n"
            "If this wasn't you, please contact support.\n\n"
            f"The {settings.APP_NAME} team"
        )
        return await self.send(to_email, subject, body)

    async def send(self, to_email: str | None, subject: str, body: str) -> bool:
        """Send one plain-text message. Returns False when nothing was sent."""
        if not to_email:
            logger.info("No recipient for '%s'; skipping email", subject)
            return False
        if not self.enabled:
            logger.info("SMTP not configured; would send '%s' to %s", subject, to_email)
            return False

        message = MIMEText(body, "plain", "utf-8")
        message["Subject"] = subject
        message["From"] = self.sender
        message["To"] = to_email

        await asyncio.to_thread(self._deliver, to_email, message)
        logger.info("Sent '%s' to %s", subject, to_email)
        return True

    def _deliver(self, to_email: str, message: MIMEText) -> None:
        context = ssl.create_default_context()
        with smtplib.SMTP(self.host, self.port, timeout=30) as server:
            server.starttls(context=context)
            if self.username and self.password:
                server.login(self.username, self.password)
            server.sendmail(self.sender, [to_email], message.as_string())


def get_mail_service() -> MailService:
    return MailService()
