"""
Admission Core Errors
=====================
Exception classes raised by the OTP, mail and account layers.
"""

from typing import Optional


class AdmissionError(Exception):
    """Base exception for all admission-core errors."""
    pass


class ConfigurationError(AdmissionError):
    """Raised when environment configuration cannot be parsed."""
    pass


class VerificationFailed(AdmissionError):
    """
    Raised when a submitted OTP is rejected.

    The message is the same for a wrong code, an expired code and an
    unknown email.
    """

    def __init__(self, message: str = "Invalid OTP or email"):
        super().__init__(message)


class MailDispatchFailed(AdmissionError):
    """Raised when the mail transport could not deliver a message."""

    def __init__(
        self,
        message: str,
        recipient: str,
        provider: str = "unknown",
        last_exception: Optional[Exception] = None,
    ):
        self.message = message
        self.recipient = recipient
        self.provider = provider
        self.last_exception = last_exception
        super().__init__(f"[{provider}] {message}")


class UserNotFound(AdmissionError):
    """Raised when no account exists for an email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__("User not found")
