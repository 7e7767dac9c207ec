"""
StealthGen - Address Encoding & Validation
============================================
Serializzazione degli script in address testuali (formato Ergo).

Security Level: HIGH
Version: 1.0.0

Address Format:
- Head byte (1 byte): network (0x00 mainnet, 0x10 testnet) + type
  (0x01 P2PK, 0x02 P2SH, 0x03 P2S)
- Content: public key (P2PK), hash (P2SH) o ErgoTree (P2S)
- Checksum (4 bytes): primi 4 byte di BLAKE2b-256(head + content)
- Base58 encoding: risultato human-readable

Gli output stealth sono sempre P2S: lo script proveDHTuple
non è un albero P2PK.
"""

from dataclasses import dataclass
from typing import Optional

from stealth_gen.constants import (
    Network,
    AddressType,
    ADDRESS_CHECKSUM_SIZE,
    COMPRESSED_POINT_SIZE,
    P2PK_TREE_PREFIX,
)
from stealth_gen.domain.crypto_core import compute_checksum
from stealth_gen.errors import InvalidAddressError
from stealth_gen.logging_setup import get_logger
from stealth_gen.utils.base58 import (
    Base58DecodeError,
    base58_encode,
    base58_decode,
)


# ============================================================================
# MODULE LOGGER
# ============================================================================

logger = get_logger("addressing")


# ============================================================================
# DECODED ADDRESS
# ============================================================================

@dataclass(frozen=True)
class DecodedAddress:
    """
    Address decodificato.

    Attributes:
        network: Network dell'address
        address_type: P2PK, P2SH o P2S
        content: Payload (pubkey, hash o ErgoTree)
    """
    network: Network
    address_type: AddressType
    content: bytes

    def to_script(self) -> bytes:
        """
        Ricostruisce l'ErgoTree per P2S e P2PK.

        Raises:
            InvalidAddressError: P2SH non contiene lo script
        """
        if self.address_type is AddressType.P2S:
            return self.content
        if self.address_type is AddressType.P2PK:
            return P2PK_TREE_PREFIX + self.content
        raise InvalidAddressError("P2SH address does not carry its script")


# ============================================================================
# ENCODING
# ============================================================================

def encode_address(
    content: bytes,
    network: Network,
    address_type: AddressType = AddressType.P2S
) -> str:
    """
    Encode address da content, network e type.

    Args:
        content: Payload
        network: Network
        address_type: Tipo address

    Returns:
        str: Address Base58
    """
    if not content:
        raise InvalidAddressError("Address content cannot be empty")

    head = bytes([Network(network) + AddressType(address_type)])
    body = head + content

    return base58_encode(body + compute_checksum(body))


def script_to_address(script: bytes, network: Network) -> str:
    """
    Converte ErgoTree in address.

    Alberi P2PK (00 08 cd + pubkey) diventano P2PK, tutto il resto P2S.

    Args:
        script: ErgoTree serializzato
        network: Network

    Returns:
        str: Address
    """
    p2pk_size = len(P2PK_TREE_PREFIX) + COMPRESSED_POINT_SIZE

    if script.startswith(P2PK_TREE_PREFIX) and len(script) == p2pk_size:
        return encode_address(script[len(P2PK_TREE_PREFIX):], network, AddressType.P2PK)

    return encode_address(script, network, AddressType.P2S)


# ============================================================================
# DECODING / VALIDATION
# ============================================================================

def decode_address(address: str) -> DecodedAddress:
    """
    Decode e validazione completa di un address.

    Args:
        address: Address string

    Returns:
        DecodedAddress: Network, type e content

    Raises:
        InvalidAddressError: Alfabeto, lunghezza, network, type o checksum invalidi
    """
    try:
        decoded = base58_decode(address)
    except Base58DecodeError as e:
        raise InvalidAddressError(f"Invalid address encoding: {e.message}") from e

    if len(decoded) < 1 + 1 + ADDRESS_CHECKSUM_SIZE:
        raise InvalidAddressError(
            "Address too short",
            details={"length": len(decoded)}
        )

    body = decoded[:-ADDRESS_CHECKSUM_SIZE]
    checksum = decoded[-ADDRESS_CHECKSUM_SIZE:]

    if compute_checksum(body) != checksum:
        raise InvalidAddressError("Address checksum mismatch")

    head = body[0]
    try:
        network = Network(head & 0xF0)
        address_type = AddressType(head & 0x0F)
    except ValueError as e:
        raise InvalidAddressError(
            f"Unknown address head byte: 0x{head:02x}",
            details={"head": head}
        ) from e

    content = body[1:]

    if address_type is AddressType.P2PK and len(content) != COMPRESSED_POINT_SIZE:
        raise InvalidAddressError(
            f"P2PK content must be {COMPRESSED_POINT_SIZE} bytes, got {len(content)}"
        )

    return DecodedAddress(network=network, address_type=address_type, content=content)


def validate_address(address: str, network: Optional[Network] = None) -> bool:
    """
    Valida address (opzionalmente per un network specifico).

    Returns:
        bool: True se valido
    """
    try:
        decoded = decode_address(address)
    except InvalidAddressError as e:
        logger.debug("Address rejected", extra_data={"reason": e.message})
        return False

    return network is None or decoded.network is Network(network)


__all__ = [
    "DecodedAddress",
    "encode_address",
    "script_to_address",
    "decode_address",
    "validate_address",
]
