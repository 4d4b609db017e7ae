"""
Accounts
========
User records and the OTP-driven activation and password reset flows.
"""

from .models import User, UserRole
from .store import UserStore, SQLAlchemyUserStore
from .schemas import SendOTPRequest, VerifyOTPRequest, ResetPasswordRequest
from .flows import AccountOTPFlow

__all__ = [
    "User",
    "UserRole",
    "UserStore",
    "SQLAlchemyUserStore",
    "SendOTPRequest",
    "VerifyOTPRequest",
    "ResetPasswordRequest",
    "AccountOTPFlow",
]
