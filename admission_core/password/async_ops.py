"""
Async Password Hashing
======================
Argon2id hashing and verification run off the event loop.
"""

import asyncio

from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from .hasher import get_cached_hasher


async def hash_password(password: str) -> str:
    """
    Hash a password using Argon2id.

    Args:
        password: Plain text password to hash

    Returns:
        Encoded Argon2id hash (algorithm, parameters, salt and digest)
    """
    if not password:
        raise ValueError("Password cannot be empty")

    hasher = get_cached_hasher()
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, hasher.hash, password)


async def verify_password(password: str, hash: str) -> bool:
    """Verify a password against an Argon2id hash."""
    if not password or not hash or not hash.startswith("$argon2"):
        return False

    hasher = get_cached_hasher()

    def _verify() -> bool:
        try:
            return hasher.verify(hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _verify)
