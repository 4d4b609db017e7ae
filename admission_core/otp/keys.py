"""
OTP Key Material
================
Derivation of the per-email key that feeds the time-step generator.
"""

import base64


def derive_key_material(secret: str, email: str) -> str:
    """
    Build the key material for an email.

    Plain concatenation of the shared secret and the address. Codes already
    issued by existing deployments depend on this exact construction.
    """
    return secret + email


def encode_key(key_material: str) -> str:
    """Base32 form of the raw key bytes, as pyotp expects its secrets."""
    return base64.b32encode(key_material.encode("utf-8")).decode("ascii")
