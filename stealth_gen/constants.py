"""
StealthGen - Core Constants
=============================
Costanti immutabili: curva secp256k1, formato stealth key, script template.

Security Level: CRITICAL
Version: 1.0.0

IMPORTANTE: questi valori definiscono il formato on-chain degli output.
Modificarli rende gli indirizzi generati irriconoscibili per il receiver.
"""

from enum import IntEnum
from typing import Final


# ============================================================================
# IDENTIFICAZIONE PROGETTO
# ============================================================================

PROJECT_NAME: Final[str] = "StealthGen"
SOFTWARE_VERSION: Final[str] = "1.0.0"


# ============================================================================
# CURVA SECP256K1
# ============================================================================

# Ordine del gruppo
SECP256K1_N: Final[int] = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

# Generator G in forma compressa (y pari -> prefisso 0x02)
SECP256K1_G_COMPRESSED: Final[bytes] = bytes.fromhex(
    "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
)

COMPRESSED_POINT_SIZE: Final[int] = 33
SCALAR_SIZE: Final[int] = 32

# Tentativi massimi di rejection sampling per uno scalare.
# Con una sorgente sana la probabilità di scarto è ~2^-128.
MAX_SCALAR_ATTEMPTS: Final[int] = 64


# ============================================================================
# STEALTH KEY FORMAT
# ============================================================================

STEALTH_KEY_PREFIX: Final[str] = "stealth"
STEALTH_CHECKSUM_SIZE: Final[int] = 4

# BLAKE2b-256, unkeyed
BLAKE2B_DIGEST_SIZE: Final[int] = 32


# ============================================================================
# OUTPUT SCRIPT TEMPLATE (ErgoTree)
# ============================================================================

# Header 0x10: constant segregation, seguito dal numero di costanti (4)
SCRIPT_HEADER: Final[bytes] = bytes.fromhex("1004")

# Costante Coll[Byte] (0x0e) + lunghezza (0x21 = 33)
SCRIPT_SLOT_TYPE: Final[int] = 0x0E
SCRIPT_SLOT_LENGTH: Final[int] = 0x21

# proveDHTuple(decodePoint(c0), decodePoint(c1), decodePoint(c2), decodePoint(c3))
SCRIPT_SUFFIX: Final[bytes] = bytes.fromhex("ceee7300ee7301ee7302ee7303")

SCRIPT_SLOT_COUNT: Final[int] = 4


# ============================================================================
# ADDRESS FORMAT
# ============================================================================

class Network(IntEnum):
    """Network prefix (nibble alto dell'head byte)"""
    MAINNET = 0x00
    TESTNET = 0x10

    @classmethod
    def from_name(cls, name: str) -> "Network":
        """
        Risolve il nome di un network.

        Examples:
            >>> Network.from_name("Testnet")
            <Network.TESTNET: 16>
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = [n.name.lower() for n in cls]
            raise ValueError(f"Invalid network: {name}. Must be one of {valid}")


class AddressType(IntEnum):
    """Address type (nibble basso dell'head byte)"""
    P2PK = 0x01
    P2SH = 0x02
    P2S = 0x03


ADDRESS_CHECKSUM_SIZE: Final[int] = 4

# ErgoTree P2PK: header 0x00, SigmaProp(ProveDlog(GroupElement constant))
P2PK_TREE_PREFIX: Final[bytes] = bytes.fromhex("0008cd")


# ============================================================================
# EXPLORER
# ============================================================================

DEFAULT_EXPLORER_URLS: Final[dict] = {
    Network.MAINNET: "https://explorer.ergoplatform.com",
    Network.TESTNET: "https://testnet.ergoplatform.com",
}

PAYMENT_REQUEST_PATH: Final[str] = "/payment-request"


__all__ = [
    "PROJECT_NAME",
    "SOFTWARE_VERSION",
    "SECP256K1_N",
    "SECP256K1_G_COMPRESSED",
    "COMPRESSED_POINT_SIZE",
    "SCALAR_SIZE",
    "MAX_SCALAR_ATTEMPTS",
    "STEALTH_KEY_PREFIX",
    "STEALTH_CHECKSUM_SIZE",
    "BLAKE2B_DIGEST_SIZE",
    "SCRIPT_HEADER",
    "SCRIPT_SLOT_TYPE",
    "SCRIPT_SLOT_LENGTH",
    "SCRIPT_SUFFIX",
    "SCRIPT_SLOT_COUNT",
    "Network",
    "AddressType",
    "ADDRESS_CHECKSUM_SIZE",
    "P2PK_TREE_PREFIX",
    "DEFAULT_EXPLORER_URLS",
    "PAYMENT_REQUEST_PATH",
]
