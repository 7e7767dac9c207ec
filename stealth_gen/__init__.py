"""
StealthGen - Stealth Address Generator
========================================
Genera payment address one-time (dual-key stealth, secp256k1)
a partire dalla stealth key pubblicata dal receiver.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

from stealth_gen.config import StealthSettings, get_settings
from stealth_gen.constants import Network
from stealth_gen.domain import (
    CurvePoint,
    DerivedPointSet,
    validate_stealth_key,
    encode_stealth_key,
    derive,
    encode_payment_address,
)
from stealth_gen.services import (
    StealthAddressService,
    GenerationResult,
    generate_stealth_address,
)

__all__ = [
    "__version__",

    # Config
    "StealthSettings",
    "get_settings",
    "Network",

    # Core
    "CurvePoint",
    "DerivedPointSet",
    "validate_stealth_key",
    "encode_stealth_key",
    "derive",
    "encode_payment_address",

    # Services
    "StealthAddressService",
    "GenerationResult",
    "generate_stealth_address",
]
