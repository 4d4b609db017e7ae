"""
OTP Service
===========
Stateless time-step one-time passwords keyed by email.

Codes are derived, never stored: the same (secret, email, time bucket)
always yields the same code, and verification re-derives it.
"""

import time
from typing import Callable, Optional

import pyotp
from pyotp.utils import strings_equal
import structlog

from ..config import OTPSettings
from ..errors import VerificationFailed
from .keys import derive_key_material, encode_key

logger = structlog.get_logger(__name__)

Clock = Callable[[], float]


class OTPService:
    """Generates and verifies email OTP codes."""

    def __init__(self, settings: OTPSettings, clock: Optional[Clock] = None):
        self.settings = settings
        self._clock = clock or time.time

    def _totp(self, email: str) -> pyotp.TOTP:
        key_material = derive_key_material(self.settings.secret, email)
        return pyotp.TOTP(
            encode_key(key_material),
            digits=self.settings.digits,
            interval=self.settings.step_seconds,
        )

    def counter(self, at: Optional[float] = None) -> int:
        """Time bucket index for a unix timestamp (now by default)."""
        now = self._clock() if at is None else at
        return int(now // self.settings.step_seconds)

    def generate(self, email: str) -> str:
        """
        Generate the code for an email in the current time bucket.

        Args:
            email: Target address; not validated here

        Returns:
            Zero-padded numeric code, settings.digits wide
        """
        return self.code_for(email, self.counter())

    def code_for(self, email: str, counter: int) -> str:
        """Code for an email in a given time bucket."""
        code = self._totp(email).generate_otp(counter)
        logger.debug("otp_generated", email=email, counter=counter)
        return code

    def verify(self, email: str, code: str) -> bool:
        """
        Check a submitted code against the current bucket and its neighbours.

        Returns False for a wrong code, an expired code and an unknown email
        alike.
        """
        code = (code or "").strip()
        if len(code) != self.settings.digits or not (code.isascii() and code.isdigit()):
            logger.info("otp_rejected", email=email)
            return False

        totp = self._totp(email)
        counter = self.counter()
        window = self.settings.valid_window

        matched = False
        for offset in range(-window, window + 1):
            if counter + offset < 0:
                continue
            # no early exit
            if strings_equal(code, totp.generate_otp(counter + offset)):
                matched = True

        if matched:
            logger.info("otp_verified", email=email)
        else:
            logger.info("otp_rejected", email=email)
        return matched

    def verify_or_raise(self, email: str, code: str) -> None:
        """Like verify(), raising VerificationFailed on rejection."""
        if not self.verify(email, code):
            raise VerificationFailed()
