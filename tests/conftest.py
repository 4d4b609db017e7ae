"""
Shared fixtures for admission-core tests.
"""

import pytest
import pytest_asyncio

from admission_core.config import OTPSettings
from admission_core.mail.base import BaseMailAdapter, SendResult
from admission_core.otp import OTPService

# 2026-01-01T00:00:00Z, aligned to a 600 second bucket
START_TIME = 1767225600.0


class FakeClock:
    """Manually advanced unix clock."""

    def __init__(self, now: float = START_TIME):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingMailAdapter(BaseMailAdapter):
    """Transport that reports every send as failed."""

    name = "failing"

    def __init__(self):
        super().__init__()
        self.attempts = 0

    async def send(self, to, subject, body):
        self.attempts += 1
        return SendResult.failed(self.name, "mailbox unavailable")


class RaisingMailAdapter(BaseMailAdapter):
    """Transport that raises from send()."""

    name = "raising"

    async def send(self, to, subject, body):
        raise ConnectionError("connection reset")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def otp_settings():
    return OTPSettings(secret="otpsecret", step_seconds=600, digits=5)


@pytest.fixture
def otp_service(otp_settings, clock):
    return OTPService(otp_settings, clock=clock)


@pytest_asyncio.fixture
async def session_factory():
    from admission_core.database import (
        close_engine,
        create_async_engine,
        create_session_factory,
        create_tables,
    )

    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)
    yield create_session_factory(engine)
    await close_engine(engine)
