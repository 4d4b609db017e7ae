"""
Console Mail Adapter
====================
Log-only transport for local development and tests.
"""

import uuid
from typing import List

import structlog

from .base import BaseMailAdapter, SendResult

logger = structlog.get_logger(__name__)


class ConsoleMailAdapter(BaseMailAdapter):
    """Logs outgoing mail instead of sending it and keeps an outbox."""

    name = "console"

    def __init__(self):
        super().__init__()
        self.outbox: List[dict] = []

    async def send(self, to: str, subject: str, body: str) -> SendResult:
        message_id = str(uuid.uuid4())
        self.outbox.append({
            "id": message_id,
            "to": to,
            "subject": subject,
            "body": body,
        })
        logger.info("Mail captured", provider=self.name, to=to, subject=subject)
        return SendResult(success=True, provider=self.name, message_id=message_id)
