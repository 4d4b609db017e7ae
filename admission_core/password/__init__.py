"""
Password Hashing
================
Async-safe password hashing using Argon2id, used when an OTP-authorised
password reset stores a new credential.
"""

from .hasher import get_cached_hasher
from .async_ops import hash_password, verify_password

__all__ = [
    "get_cached_hasher",
    "hash_password",
    "verify_password",
]
