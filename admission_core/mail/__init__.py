"""
Mail Adapters
=============
Transports used to deliver OTP emails.
"""

from ..config import MailSettings
from ..errors import ConfigurationError
from .base import BaseMailAdapter, MailStatus, SendResult
from .brevo import BrevoMailAdapter
from .console import ConsoleMailAdapter
from .smtp import SMTPMailAdapter


def create_mail_adapter(settings: MailSettings) -> BaseMailAdapter:
    """Build the adapter selected by settings.backend."""
    if settings.backend == "console":
        return ConsoleMailAdapter()
    if settings.backend == "smtp":
        return SMTPMailAdapter(settings)
    if settings.backend == "brevo":
        return BrevoMailAdapter(settings)
    raise ConfigurationError(f"Unknown mail backend: {settings.backend}")


__all__ = [
    "BaseMailAdapter",
    "MailStatus",
    "SendResult",
    "ConsoleMailAdapter",
    "SMTPMailAdapter",
    "BrevoMailAdapter",
    "create_mail_adapter",
]
