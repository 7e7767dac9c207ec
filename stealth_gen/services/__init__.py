"""
StealthGen - Services Layer
=============================
Business logic per CLI e integrazioni.
"""

from stealth_gen.services.stealth_service import (
    StealthAddressService,
    GenerationResult,
    KeyCheck,
    AddressInspection,
    generate_stealth_address,
    payment_request_uri,
)

__all__ = [
    "StealthAddressService",
    "GenerationResult",
    "KeyCheck",
    "AddressInspection",
    "generate_stealth_address",
    "payment_request_uri",
]
