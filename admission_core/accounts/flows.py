"""
Account OTP Flows
=================
Account activation and password reset driven by emailed OTP codes.

Route contract:
    POST /api/users/send-otp        -> send_otp        (500 on MailDispatchFailed)
    POST /api/users/verify-otp      -> verify_otp      (400 VerificationFailed, 404 UserNotFound)
    POST /api/users/reset-password  -> reset_password  (400 VerificationFailed, 404 UserNotFound)
"""

import structlog

from ..errors import UserNotFound, VerificationFailed
from ..logging import log_audit
from ..mail.base import BaseMailAdapter
from ..otp import OTPDelivery, OTPService, send_otp
from ..password import hash_password
from .store import UserStore

logger = structlog.get_logger(__name__)


class AccountOTPFlow:
    """Ties OTP issuance and verification to user records."""

    def __init__(self, otp_service: OTPService, mailer: BaseMailAdapter, store: UserStore):
        self.otp_service = otp_service
        self.mailer = mailer
        self.store = store

    async def send_otp(self, email: str) -> OTPDelivery:
        """
        Email a fresh code to the address.

        Raises:
            MailDispatchFailed: If the transport could not deliver it
        """
        return await send_otp(self.otp_service, self.mailer, email)

    async def verify_otp(self, email: str, otp: str) -> None:
        """
        Activate the account owning email if otp is valid.

        Raises:
            VerificationFailed: Wrong or expired code
            UserNotFound: Code valid but no account for the email
        """
        self._check(email, otp, action="account.activate")

        if not await self.store.activate(email):
            log_audit("account.activate", resource_type="user", resource_id=email, outcome="failure")
            raise UserNotFound(email)

        log_audit("account.activate", resource_type="user", resource_id=email)

    async def reset_password(self, email: str, otp: str, new_password: str) -> None:
        """
        Replace the password of the account owning email if otp is valid.

        Raises:
            VerificationFailed: Wrong or expired code
            UserNotFound: Code valid but no account for the email
        """
        self._check(email, otp, action="account.password_reset")

        password_hash = await hash_password(new_password)
        if not await self.store.set_password_hash(email, password_hash):
            log_audit("account.password_reset", resource_type="user", resource_id=email, outcome="failure")
            raise UserNotFound(email)

        log_audit("account.password_reset", resource_type="user", resource_id=email)

    def _check(self, email: str, otp: str, action: str) -> None:
        try:
            self.otp_service.verify_or_raise(email, otp)
        except VerificationFailed:
            log_audit(action, resource_type="user", resource_id=email, outcome="failure",
                      metadata={"reason": "invalid_otp"})
            raise
