"""
Brevo Mail Adapter
==================
Delivery through the Brevo (Sendinblue) transactional email API.
"""

from typing import Any, Dict, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import MailSettings
from .base import BaseMailAdapter, SendResult

logger = structlog.get_logger(__name__)

BREVO_API_URL = "https://api.brevo.com/v3"


class BrevoServerError(Exception):
    """5xx response from Brevo; retried."""

    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        super().__init__(f"Brevo server error ({status_code}): {text}")


class BrevoMailAdapter(BaseMailAdapter):
    """
    Brevo transactional email adapter.

    Network errors and 5xx responses are retried with exponential backoff;
    4xx responses fail immediately.
    """

    name = "brevo"

    def __init__(
        self,
        settings: MailSettings,
        max_attempts: int = 3,
        backoff: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__()
        if not settings.brevo_api_key:
            raise ValueError("BREVO_API_KEY is required for the brevo mail backend")
        self.settings = settings
        self.max_attempts = max_attempts
        self.backoff = backoff
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def initialize(self) -> None:
        """Create HTTP client with the API key header."""
        self._client = httpx.AsyncClient(
            base_url=BREVO_API_URL,
            headers={
                "accept": "application/json",
                "api-key": self.settings.brevo_api_key,
                "content-type": "application/json",
            },
            timeout=self.settings.timeout,
            transport=self._transport,
        )
        await super().initialize()

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
        await super().close()

    def _payload(self, to: str, subject: str, body: str) -> Dict[str, Any]:
        return {
            "sender": {"email": self.settings.sender, "name": self.settings.sender_name},
            "to": [{"email": to}],
            "subject": subject,
            "htmlContent": body,
            "textContent": body,
        }

    async def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        response = await self._client.post("/smtp/email", json=payload)
        if response.status_code >= 500:
            raise BrevoServerError(response.status_code, response.text)
        return response

    async def send(self, to: str, subject: str, body: str) -> SendResult:
        if not self._client:
            raise RuntimeError("Adapter not initialized")

        payload = self._payload(to, subject, body)
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.backoff, max=8),
            retry=retry_if_exception_type((httpx.TransportError, BrevoServerError)),
        )
        try:
            async for attempt in retrying:
                with attempt:
                    response = await self._post(payload)
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error("Brevo send failed", to=to, attempts=self.max_attempts, error=str(cause))
            return SendResult.failed(self.name, str(cause))

        if response.status_code >= 300:
            logger.error("Brevo rejected message", to=to, status=response.status_code)
            return SendResult.failed(
                self.name, f"Brevo send failed ({response.status_code}): {response.text}"
            )

        # accepted; a missing or unparseable body only loses the message id
        try:
            data = response.json()
        except ValueError:
            data = None
        message_id = data.get("messageId") if isinstance(data, dict) else None
        logger.info("Mail sent", provider=self.name, to=to)
        return SendResult(success=True, provider=self.name, message_id=message_id)
