"""
StealthGen - Stealth Public Key
=================================
Decoding e validazione della stealth key pubblicata dal receiver.

Version: 1.0.0

Key Format:
- Prefisso letterale: "stealth"
- Base58 di: point (33 bytes, secp256k1 compresso) || checksum (4 bytes)
- Checksum: primi 4 byte di BLAKE2b-256(point)

Pipeline di validazione (fail-fast, nell'ordine):
1. prefisso presente una volta, in testa     -> MalformedKeyError
2. alfabeto Base58                           -> MalformedKeyError
3. lunghezza >= 4                            -> MalformedKeyError
4. checksum                                  -> ChecksumMismatchError
5. curve membership                          -> InvalidPointError
"""

from stealth_gen.constants import (
    STEALTH_KEY_PREFIX,
    STEALTH_CHECKSUM_SIZE,
)
from stealth_gen.domain.crypto_core import (
    CurvePoint,
    compute_checksum,
    decode_point,
)
from stealth_gen.errors import (
    StealthKeyError,
    MalformedKeyError,
    ChecksumMismatchError,
    InvalidPointError,
)
from stealth_gen.logging_setup import get_logger
from stealth_gen.utils.base58 import (
    Base58DecodeError,
    base58_encode,
    base58_decode,
)


logger = get_logger("stealth_key")


def validate_stealth_key(stealth_key: str) -> CurvePoint:
    """
    Valida una stealth key ed estrae il punto del receiver.

    Funzione pura: stesso input, stesso esito e stesso punto.

    Args:
        stealth_key: Testo inserito dall'utente

    Returns:
        CurvePoint: Punto ``u`` del receiver

    Raises:
        MalformedKeyError: Prefisso assente, ripetuto o non in testa; Base58 invalido, payload corto
        ChecksumMismatchError: Checksum non corrisponde
        InvalidPointError: Payload non è un punto compresso valido

    Examples:
        >>> validate_stealth_key("9hstealthkey")
        Traceback (most recent call last):
        ...
        stealth_gen.errors.MalformedKeyError: [MALFORMED_KEY] invalid stealth key format | Details: {'leading_text': 2}
    """
    if not isinstance(stealth_key, str):
        raise MalformedKeyError(
            f"Stealth key must be text, got {type(stealth_key).__name__}"
        )

    segments = stealth_key.split(STEALTH_KEY_PREFIX)
    if len(segments) != 2:
        raise MalformedKeyError(
            "invalid stealth key format",
            details={"prefix_count": len(segments) - 1}
        )

    if segments[0]:
        raise MalformedKeyError(
            "invalid stealth key format",
            details={"leading_text": len(segments[0])}
        )

    try:
        decoded = base58_decode(segments[1])
    except Base58DecodeError as e:
        raise MalformedKeyError(
            "invalid stealth key format: bad Base58 encoding",
            details=e.details
        ) from e

    if len(decoded) < STEALTH_CHECKSUM_SIZE:
        raise MalformedKeyError(
            "invalid stealth key format: payload too short",
            details={"length": len(decoded)}
        )

    main_bytes = decoded[:-STEALTH_CHECKSUM_SIZE]
    checksum = decoded[-STEALTH_CHECKSUM_SIZE:]

    if compute_checksum(main_bytes) != checksum:
        raise ChecksumMismatchError("invalid checksum")

    point = decode_point(main_bytes)

    logger.debug(
        "Stealth key validated",
        extra_data={"point": point.hex()[:16]}
    )

    return point


def encode_stealth_key(point: CurvePoint) -> str:
    """
    Codifica un punto come stealth key (inverso di validate_stealth_key).

    Examples:
        >>> from stealth_gen.domain.crypto_core import GENERATOR
        >>> validate_stealth_key(encode_stealth_key(GENERATOR)) == GENERATOR
        True
    """
    main_bytes = point.compressed
    return STEALTH_KEY_PREFIX + base58_encode(main_bytes + compute_checksum(main_bytes))


def is_valid_stealth_key(stealth_key: str) -> bool:
    """Check booleano, senza eccezioni"""
    try:
        validate_stealth_key(stealth_key)
    except (StealthKeyError, InvalidPointError) as e:
        logger.debug("Stealth key rejected", extra_data={"reason": e.code})
        return False
    return True


__all__ = [
    "validate_stealth_key",
    "encode_stealth_key",
    "is_valid_stealth_key",
]
