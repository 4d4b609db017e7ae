"""
Admission Core Library
======================
Email OTP verification, mail delivery and account flows for the
admissions backend.
"""

__version__ = "0.1.0"

# Config
from admission_core.config import (
    OTPSettings,
    MailSettings,
    get_settings,
    get_mail_settings,
)

# Errors
from admission_core.errors import (
    AdmissionError,
    ConfigurationError,
    VerificationFailed,
    MailDispatchFailed,
    UserNotFound,
)

# OTP
from admission_core.otp import (
    derive_key_material,
    OTPService,
    OTPDelivery,
    OTPMessage,
    render_otp_message,
    send_otp,
)

# Mail
from admission_core.mail import (
    BaseMailAdapter,
    SendResult,
    MailStatus,
    ConsoleMailAdapter,
    SMTPMailAdapter,
    BrevoMailAdapter,
    create_mail_adapter,
)

# Accounts
from admission_core.accounts import (
    User,
    UserRole,
    UserStore,
    SQLAlchemyUserStore,
    AccountOTPFlow,
)

# Logging
from admission_core.logging import setup_logging, log_audit

__all__ = [
    # Config
    "OTPSettings",
    "MailSettings",
    "get_settings",
    "get_mail_settings",
    # Errors
    "AdmissionError",
    "ConfigurationError",
    "VerificationFailed",
    "MailDispatchFailed",
    "UserNotFound",
    # OTP
    "derive_key_material",
    "OTPService",
    "OTPDelivery",
    "OTPMessage",
    "render_otp_message",
    "send_otp",
    # Mail
    "BaseMailAdapter",
    "SendResult",
    "MailStatus",
    "ConsoleMailAdapter",
    "SMTPMailAdapter",
    "BrevoMailAdapter",
    "create_mail_adapter",
    # Accounts
    "User",
    "UserRole",
    "UserStore",
    "SQLAlchemyUserStore",
    "AccountOTPFlow",
    # Logging
    "setup_logging",
    "log_audit",
]
