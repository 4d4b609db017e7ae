"""
SMTP Mail Adapter
=================
Delivery through an SMTP relay (Gmail, Mailgun SMTP, local MTA).

smtplib is blocking, so each send runs in the default thread executor.
"""

import asyncio
import smtplib
from email.message import EmailMessage
from email.utils import formataddr, make_msgid

import structlog

from ..config import MailSettings
from .base import BaseMailAdapter, SendResult

logger = structlog.get_logger(__name__)


class SMTPMailAdapter(BaseMailAdapter):
    """SMTP transport with optional STARTTLS and login."""

    name = "smtp"

    def __init__(self, settings: MailSettings):
        super().__init__()
        if not settings.smtp_host:
            raise ValueError("SMTP_HOST is required for the smtp mail backend")
        self.settings = settings

    def _build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = formataddr((self.settings.sender_name, self.settings.sender))
        msg["To"] = to
        msg["Message-ID"] = make_msgid()
        msg.set_content(body)
        return msg

    def _deliver(self, msg: EmailMessage) -> None:
        s = self.settings
        with smtplib.SMTP(s.smtp_host, s.smtp_port, timeout=s.timeout) as server:
            if s.smtp_use_tls:
                server.starttls()
            if s.smtp_user and s.smtp_password:
                server.login(s.smtp_user, s.smtp_password)
            server.send_message(msg)

    async def send(self, to: str, subject: str, body: str) -> SendResult:
        msg = self._build_message(to, subject, body)
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP send failed", to=to, error=str(e))
            return SendResult.failed(self.name, str(e))

        logger.info("Mail sent", provider=self.name, to=to)
        return SendResult(success=True, provider=self.name, message_id=msg["Message-ID"])
