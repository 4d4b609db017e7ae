"""
OTP Models
==========
Value objects produced by the OTP layer.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..mail.base import SendResult


@dataclass(frozen=True)
class OTPMessage:
    """Subject and body of an OTP delivery email."""
    subject: str
    body: str


@dataclass
class OTPDelivery:
    """A code that was generated and handed to the mail transport."""
    email: str
    code: str = field(repr=False)
    counter: int
    result: Optional[SendResult] = None

    @property
    def delivered(self) -> bool:
        return self.result is not None and self.result.success
