"""
StealthGen - Stealth Output Script
====================================
ErgoTree template con quattro slot per i punti derivati.

Version: 1.0.0

Layout (byte):
    10 04                   header (constant segregation) + 4 costanti
    0e 21 <Gr: 33 bytes>    Coll[Byte] di lunghezza 33
    0e 21 <Gy: 33 bytes>
    0e 21 <Ur: 33 bytes>
    0e 21 <Uy: 33 bytes>
    ce ee 7300 ee 7301 ee 7302 ee 7303
                            proveDHTuple(decodePoint(c0), ..., decodePoint(c3))

Nessuna crittografia qui: solo ordine e dimensione degli slot.
"""

from typing import List

from stealth_gen.constants import (
    COMPRESSED_POINT_SIZE,
    SCRIPT_HEADER,
    SCRIPT_SLOT_TYPE,
    SCRIPT_SLOT_LENGTH,
    SCRIPT_SLOT_COUNT,
    SCRIPT_SUFFIX,
    Network,
)
from stealth_gen.domain.addressing import script_to_address
from stealth_gen.domain.crypto_core import CurvePoint
from stealth_gen.domain.derivation import DerivedPointSet
from stealth_gen.errors import EncodingError, InvalidPointError
from stealth_gen.logging_setup import get_logger


logger = get_logger("script")

SLOT_SIZE = 2 + COMPRESSED_POINT_SIZE

STEALTH_SCRIPT_SIZE = (
    len(SCRIPT_HEADER) + SCRIPT_SLOT_COUNT * SLOT_SIZE + len(SCRIPT_SUFFIX)
)


def _encode_slot(point_bytes: bytes, index: int) -> bytes:
    if SCRIPT_SLOT_LENGTH != COMPRESSED_POINT_SIZE:
        raise EncodingError(
            "Script slot length prefix does not match compressed point size",
            details={"length_prefix": SCRIPT_SLOT_LENGTH, "point_size": COMPRESSED_POINT_SIZE}
        )

    if len(point_bytes) != SCRIPT_SLOT_LENGTH:
        raise EncodingError(
            f"Slot {index} holds {len(point_bytes)} bytes, expected {SCRIPT_SLOT_LENGTH}",
            details={"slot": index}
        )

    return bytes([SCRIPT_SLOT_TYPE, SCRIPT_SLOT_LENGTH]) + point_bytes


def build_stealth_script(points: DerivedPointSet) -> bytes:
    """
    Costruisce lo script riempiendo gli slot nell'ordine (Gr, Gy, Ur, Uy).

    Args:
        points: Punti derivati

    Returns:
        bytes: ErgoTree serializzato

    Raises:
        EncodingError: Slot di dimensione diversa da 33 bytes
    """
    slots = [
        _encode_slot(bytes(point), index)
        for index, point in enumerate(points)
    ]

    if len(slots) != SCRIPT_SLOT_COUNT:
        raise EncodingError(
            f"Expected {SCRIPT_SLOT_COUNT} points, got {len(slots)}"
        )

    script = SCRIPT_HEADER + b"".join(slots) + SCRIPT_SUFFIX

    if len(script) != STEALTH_SCRIPT_SIZE:
        raise EncodingError(
            f"Stealth script has {len(script)} bytes, expected {STEALTH_SCRIPT_SIZE}"
        )

    logger.debug("Stealth script built", extra_data={"size": len(script)})

    return script


def parse_stealth_script(script: bytes) -> DerivedPointSet:
    """
    Parse stretto dello script: inverso di build_stealth_script.

    Raises:
        EncodingError: Script non conforme al template o punto invalido
    """
    if len(script) != STEALTH_SCRIPT_SIZE:
        raise EncodingError(
            f"Not a stealth script: {len(script)} bytes, expected {STEALTH_SCRIPT_SIZE}"
        )

    if not script.startswith(SCRIPT_HEADER) or not script.endswith(SCRIPT_SUFFIX):
        raise EncodingError("Not a stealth script: header/body mismatch")

    points: List[CurvePoint] = []
    offset = len(SCRIPT_HEADER)

    for index in range(SCRIPT_SLOT_COUNT):
        slot = script[offset:offset + SLOT_SIZE]
        if slot[0] != SCRIPT_SLOT_TYPE or slot[1] != SCRIPT_SLOT_LENGTH:
            raise EncodingError(
                f"Slot {index} has unexpected type/length prefix",
                details={"slot": index, "prefix": slot[:2].hex()}
            )

        try:
            points.append(CurvePoint(slot[2:]))
        except InvalidPointError as e:
            raise EncodingError(
                f"Slot {index} does not hold a valid point",
                details={"slot": index}
            ) from e

        offset += SLOT_SIZE

    return DerivedPointSet(*points)


def encode_payment_address(points: DerivedPointSet, network: Network) -> str:
    """
    Output encoder: punti derivati -> script -> address del network.

    La stringa del serializer è restituita invariata.

    Raises:
        EncodingError: Slot malformati (prima di arrivare al serializer)
    """
    return script_to_address(build_stealth_script(points), network)


__all__ = [
    "STEALTH_SCRIPT_SIZE",
    "build_stealth_script",
    "parse_stealth_script",
    "encode_payment_address",
]
