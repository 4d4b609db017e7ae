"""
Configuration
=============
Immutable settings for OTP derivation and mail delivery, read from the
environment once at startup and passed into the components that need them.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional

import structlog

from .errors import ConfigurationError

logger = structlog.get_logger(__name__)

# Used when OTPKEY is unset. Known weak; kept so codes match existing deployments.
DEFAULT_OTP_SECRET = "otpsecret"
DEFAULT_STEP_SECONDS = 600
DEFAULT_DIGITS = 5
DEFAULT_VALID_WINDOW = 1
DEFAULT_SUBJECT = "One time password"

MAIL_BACKENDS = ("console", "smtp", "brevo")


def _int_env(environ: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def _bool_env(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class OTPSettings:
    """Parameters of the time-step code derivation."""
    secret: str = DEFAULT_OTP_SECRET
    step_seconds: int = DEFAULT_STEP_SECONDS
    digits: int = DEFAULT_DIGITS
    valid_window: int = DEFAULT_VALID_WINDOW  # buckets accepted either side
    subject: str = DEFAULT_SUBJECT

    def __post_init__(self):
        if self.step_seconds <= 0:
            raise ConfigurationError("step_seconds must be positive")
        if not 1 <= self.digits <= 10:
            raise ConfigurationError("digits must be between 1 and 10")
        if self.valid_window < 0:
            raise ConfigurationError("valid_window cannot be negative")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "OTPSettings":
        """
        Build settings from environment variables.

        Reads OTPKEY, OTP_STEP_SECONDS, OTP_DIGITS and OTP_VALID_WINDOW.
        A missing OTPKEY falls back to DEFAULT_OTP_SECRET with a warning.
        """
        environ = os.environ if environ is None else environ

        secret = environ.get("OTPKEY") or ""
        if not secret:
            logger.warning(
                "otp_secret_fallback",
                reason="OTPKEY is not set, using the built-in default secret",
            )
            secret = DEFAULT_OTP_SECRET

        return cls(
            secret=secret,
            step_seconds=_int_env(environ, "OTP_STEP_SECONDS", DEFAULT_STEP_SECONDS),
            digits=_int_env(environ, "OTP_DIGITS", DEFAULT_DIGITS),
            valid_window=_int_env(environ, "OTP_VALID_WINDOW", DEFAULT_VALID_WINDOW, minimum=0),
            subject=environ.get("OTP_SUBJECT") or DEFAULT_SUBJECT,
        )


@dataclass(frozen=True)
class MailSettings:
    """Configuration for the outgoing mail transport."""
    backend: str = "console"
    sender: str = "noreply@example.com"
    sender_name: str = "Admissions"
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_use_tls: bool = True
    brevo_api_key: Optional[str] = None
    timeout: float = 15.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MailSettings":
        environ = os.environ if environ is None else environ

        backend = (environ.get("MAIL_BACKEND") or "console").strip().lower()
        if backend not in MAIL_BACKENDS:
            raise ConfigurationError(
                f"MAIL_BACKEND must be one of {', '.join(MAIL_BACKENDS)}, got {backend!r}"
            )

        smtp_user = environ.get("SMTP_USER") or None
        return cls(
            backend=backend,
            sender=environ.get("MAIL_FROM") or smtp_user or cls.sender,
            sender_name=environ.get("MAIL_FROM_NAME") or cls.sender_name,
            smtp_host=environ.get("SMTP_HOST") or None,
            smtp_port=_int_env(environ, "SMTP_PORT", cls.smtp_port),
            smtp_user=smtp_user,
            smtp_password=environ.get("SMTP_PASS") or None,
            smtp_use_tls=_bool_env(environ, "SMTP_USE_TLS", True),
            brevo_api_key=environ.get("BREVO_API_KEY") or None,
        )


@lru_cache(maxsize=1)
def get_settings() -> OTPSettings:
    """Process-wide OTP settings, built on first use."""
    return OTPSettings.from_env()


@lru_cache(maxsize=1)
def get_mail_settings() -> MailSettings:
    """Process-wide mail settings, built on first use."""
    return MailSettings.from_env()
