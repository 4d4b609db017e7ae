"""
Mail Adapter Base
=================
Transport-agnostic interface for delivering email.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


class MailStatus(str, Enum):
    SENT = "sent"
    FAILED = "failed"


@dataclass
class SendResult:
    """Result of a mail send operation."""
    success: bool
    provider: str
    status: MailStatus = MailStatus.SENT
    message_id: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def failed(cls, provider: str, error_message: str) -> "SendResult":
        return cls(
            success=False,
            provider=provider,
            status=MailStatus.FAILED,
            error_message=error_message,
        )


class BaseMailAdapter(ABC):
    """
    Abstract base class for mail transports.

    Implementations report delivery problems through SendResult rather
    than raising, so callers decide how a failed send is surfaced.
    """

    name: str = "base"

    def __init__(self):
        self._is_initialized = False

    async def initialize(self) -> None:
        """Acquire transport resources (e.g., HTTP clients)."""
        self._is_initialized = True
        logger.info("Mail adapter initialized", provider=self.name)

    async def close(self) -> None:
        """Release transport resources."""
        self._is_initialized = False
        logger.info("Mail adapter closed", provider=self.name)

    async def __aenter__(self) -> "BaseMailAdapter":
        await self.initialize()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> SendResult:
        """
        Send a single email.

        Args:
            to: Recipient address
            subject: Subject line
            body: Message body

        Returns:
            SendResult describing the outcome
        """
        pass

    async def health_check(self) -> bool:
        return self._is_initialized
