"""
StealthGen - Domain Layer
===========================
Core crittografico: stealth key, derivazione, script, address.
"""

from stealth_gen.domain.crypto_core import (
    CurvePoint,
    GENERATOR,
    RandomSource,
    SystemRandomSource,
    FixedSequenceRandomSource,
    compute_blake2b,
    compute_checksum,
    decode_point,
    encode_point,
    generator_multiply,
    sample_scalar,
)
from stealth_gen.domain.stealth_key import (
    validate_stealth_key,
    encode_stealth_key,
    is_valid_stealth_key,
)
from stealth_gen.domain.derivation import (
    DerivedPointSet,
    derive,
    is_addressed_to,
)
from stealth_gen.domain.addressing import (
    DecodedAddress,
    encode_address,
    decode_address,
    script_to_address,
    validate_address,
)
from stealth_gen.domain.script import (
    STEALTH_SCRIPT_SIZE,
    build_stealth_script,
    parse_stealth_script,
    encode_payment_address,
)

__all__ = [
    # Crypto core
    "CurvePoint",
    "GENERATOR",
    "RandomSource",
    "SystemRandomSource",
    "FixedSequenceRandomSource",
    "compute_blake2b",
    "compute_checksum",
    "decode_point",
    "encode_point",
    "generator_multiply",
    "sample_scalar",

    # Stealth key
    "validate_stealth_key",
    "encode_stealth_key",
    "is_valid_stealth_key",

    # Derivation
    "DerivedPointSet",
    "derive",
    "is_addressed_to",

    # Addressing
    "DecodedAddress",
    "encode_address",
    "decode_address",
    "script_to_address",
    "validate_address",

    # Script
    "STEALTH_SCRIPT_SIZE",
    "build_stealth_script",
    "parse_stealth_script",
    "encode_payment_address",
]
