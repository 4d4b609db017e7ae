"""
OTP Delivery
============
Renders the OTP email and hands it to a mail adapter.
"""

import structlog

from ..config import OTPSettings
from ..errors import MailDispatchFailed
from ..logging import log_error
from ..mail.base import BaseMailAdapter
from .models import OTPDelivery, OTPMessage
from .service import OTPService

logger = structlog.get_logger(__name__)

BODY_TEMPLATE = "Code for verify account <h1>{code}</h1>"


def render_otp_message(code: str, settings: OTPSettings) -> OTPMessage:
    return OTPMessage(subject=settings.subject, body=BODY_TEMPLATE.format(code=code))


async def send_otp(service: OTPService, mailer: BaseMailAdapter, email: str) -> OTPDelivery:
    """
    Generate a code for email and dispatch it.

    The code is computed before the send is attempted and stays valid for
    its time window whether or not delivery succeeds.

    Raises:
        MailDispatchFailed: If the adapter reports a failure or raises
    """
    counter = service.counter()
    code = service.code_for(email, counter)
    delivery = OTPDelivery(email=email, code=code, counter=counter)

    message = render_otp_message(code, service.settings)
    try:
        result = await mailer.send(email, message.subject, message.body)
    except Exception as e:
        log_error(e, context="otp_dispatch", email=email, provider=mailer.name)
        raise MailDispatchFailed(
            "Mail transport raised", recipient=email, provider=mailer.name, last_exception=e
        ) from e

    delivery.result = result
    if not result.success:
        logger.warning(
            "otp_dispatch_failed", email=email, provider=result.provider, error=result.error_message
        )
        raise MailDispatchFailed(
            result.error_message or "Delivery failed", recipient=email, provider=result.provider
        )

    logger.info("otp_dispatched", email=email, provider=result.provider)
    return delivery
