"""
StealthGen - Base58 Encoding
==============================
Base58 (alfabeto Bitcoin) senza checksum proprio.

Il checksum di stealth key e address è BLAKE2b (vedi crypto_core),
quindi qui NON si usa Base58Check.
"""

import base58

from stealth_gen.errors import StealthGenException


class Base58DecodeError(StealthGenException):
    """Stringa non decodificabile in Base58"""
    default_code = "INVALID_BASE58"


# Bitcoin Base58 alphabet (no 0, O, I, l)
BASE58_ALPHABET = base58.BITCOIN_ALPHABET.decode('ascii')

_ALPHABET_SET = frozenset(BASE58_ALPHABET)


def base58_encode(data: bytes) -> str:
    """
    Encode bytes to Base58 string.

    Examples:
        >>> base58_encode(b"hello")
        'Cn8eVZg'
    """
    return base58.b58encode(data).decode('ascii')


def base58_decode(encoded: str) -> bytes:
    """
    Decode Base58 string to bytes.

    Nessuna tolleranza: whitespace o caratteri fuori alfabeto
    sono rifiutati (la libreria ignorerebbe whitespace finale).

    Raises:
        Base58DecodeError: Carattere invalido

    Examples:
        >>> base58_decode('Cn8eVZg')
        b'hello'
    """
    if not isinstance(encoded, str):
        raise Base58DecodeError(
            f"Base58 input must be str, got {type(encoded).__name__}"
        )

    for position, char in enumerate(encoded):
        if char not in _ALPHABET_SET:
            raise Base58DecodeError(
                f"Invalid Base58 character {char!r} at position {position}",
                details={"position": position}
            )

    try:
        return base58.b58decode(encoded)
    except ValueError as e:
        raise Base58DecodeError(f"Base58 decoding failed: {e}") from e


__all__ = [
    "BASE58_ALPHABET",
    "Base58DecodeError",
    "base58_encode",
    "base58_decode",
]
