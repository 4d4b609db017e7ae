"""
User Store
==========
Datastore boundary used by the OTP account flows.
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..database import session_scope
from .models import User

logger = structlog.get_logger(__name__)


class UserStore(ABC):
    """Loads and updates user records by email."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def activate(self, email: str) -> bool:
        """Set is_active; returns False when no such user exists."""
        pass

    @abstractmethod
    async def set_password_hash(self, email: str, password_hash: str) -> bool:
        """Replace the stored credential; returns False when no such user exists."""
        pass


class SQLAlchemyUserStore(UserStore):
    """UserStore backed by the users table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get_by_email(self, email: str) -> Optional[User]:
        async with session_scope(self._session_factory) as db:
            result = await db.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def _update(self, email: str, **values) -> bool:
        async with session_scope(self._session_factory) as db:
            result = await db.execute(
                update(User).where(User.email == email).values(**values)
            )
            return result.rowcount > 0

    async def activate(self, email: str) -> bool:
        updated = await self._update(email, is_active=True)
        logger.info("User activation", email=email, updated=updated)
        return updated

    async def set_password_hash(self, email: str, password_hash: str) -> bool:
        updated = await self._update(email, password=password_hash)
        logger.info("User password replaced", email=email, updated=updated)
        return updated
