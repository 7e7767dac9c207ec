"""
StealthGen - Utilities Package
================================
Codec condivisi.
"""

from stealth_gen.utils.base58 import (
    BASE58_ALPHABET,
    Base58DecodeError,
    base58_encode,
    base58_decode,
)

__all__ = [
    "BASE58_ALPHABET",
    "Base58DecodeError",
    "base58_encode",
    "base58_decode",
]
