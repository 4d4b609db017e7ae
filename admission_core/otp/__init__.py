"""
OTP Generation and Verification
================================
Email-keyed time-step one-time passwords and their delivery.
"""

from .keys import derive_key_material, encode_key
from .models import OTPDelivery, OTPMessage
from .service import OTPService
from .delivery import render_otp_message, send_otp

__all__ = [
    # Keys
    "derive_key_material",
    "encode_key",
    # Models
    "OTPDelivery",
    "OTPMessage",
    # Service
    "OTPService",
    # Delivery
    "render_otp_message",
    "send_otp",
]
