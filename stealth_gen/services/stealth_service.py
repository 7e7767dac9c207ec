"""
StealthGen - Stealth Address Service
======================================
Pipeline completa: stealth key -> punti derivati -> payment address.

Version: 1.0.0

Il service è il confine tra il core (che solleva eccezioni tipizzate)
e la presentazione (CLI/script), che riceve risultati tagged:
successo con address, oppure codice errore + motivo leggibile.
Nessun address parziale o di fallback in caso di errore.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union
from urllib.parse import urlencode

from stealth_gen.config import StealthSettings, get_settings
from stealth_gen.constants import (
    Network,
    AddressType,
    PAYMENT_REQUEST_PATH,
)
from stealth_gen.domain.addressing import decode_address
from stealth_gen.domain.crypto_core import RandomSource, SystemRandomSource
from stealth_gen.domain.derivation import DerivedPointSet, derive
from stealth_gen.domain.script import encode_payment_address, parse_stealth_script
from stealth_gen.domain.stealth_key import validate_stealth_key
from stealth_gen.errors import StealthGenException, EncodingError
from stealth_gen.logging_setup import get_logger, PerformanceLogger


logger = get_logger("service")

# Oltre questa soglia la generazione viene loggata come warning
SLOW_GENERATION_MS = 1000


# ============================================================================
# PURE PIPELINE
# ============================================================================

def generate_stealth_address(
    stealth_key: str,
    network: Network = Network.MAINNET,
    rng: Optional[RandomSource] = None
) -> str:
    """
    Genera un payment address one-time per la stealth key.

    Idle -> Validating -> Deriving -> Encoding -> Done; qualsiasi
    errore interrompe la pipeline senza output.

    Args:
        stealth_key: Stealth key del receiver
        network: Network dell'address
        rng: Sorgente di entropia (default: CSPRNG di sistema)

    Returns:
        str: Payment address

    Raises:
        MalformedKeyError, ChecksumMismatchError, InvalidPointError,
        RandomSourceError, EncodingError
    """
    receiver = validate_stealth_key(stealth_key)
    points = derive(receiver, rng)
    return encode_payment_address(points, network)


def payment_request_uri(address: str, explorer_url: str) -> str:
    """
    URI di payment request per display (non fa parte del core).

    Examples:
        >>> payment_request_uri("9abc", "https://explorer.ergoplatform.com")
        'https://explorer.ergoplatform.com/payment-request?address=9abc'
    """
    query = urlencode({"address": address})
    return f"{explorer_url.rstrip('/')}{PAYMENT_REQUEST_PATH}?{query}"


# ============================================================================
# RESULT TYPES
# ============================================================================

@dataclass
class GenerationResult:
    """
    Esito tagged di una generazione.

    Attributes:
        success: True se tutti gli address sono stati generati
        network: Network richiesto
        addresses: Address generati (vuoto se fallito)
        payment_uris: URI di payment request, uno per address
        error: {"error": code, "message": ..., "details": ...} se fallito
    """
    success: bool
    network: Network
    addresses: List[str] = field(default_factory=list)
    payment_uris: List[str] = field(default_factory=list)
    error: Optional[dict] = None

    @property
    def address(self) -> Optional[str]:
        return self.addresses[0] if self.addresses else None

    @property
    def error_code(self) -> Optional[str]:
        return self.error["error"] if self.error else None

    @property
    def reason(self) -> Optional[str]:
        return self.error["message"] if self.error else None

    @classmethod
    def failed(cls, network: Network, exc: StealthGenException) -> "GenerationResult":
        return cls(success=False, network=network, error=exc.to_dict())

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "network": self.network.name.lower(),
            "addresses": list(self.addresses),
            "payment_uris": list(self.payment_uris),
            "error": self.error,
        }


@dataclass
class KeyCheck:
    """Esito tagged della validazione di una stealth key"""
    valid: bool
    point_hex: Optional[str] = None
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        return {"valid": self.valid, "point": self.point_hex, "error": self.error}


@dataclass
class AddressInspection:
    """
    Dettaglio di un address decodificato.

    Attributes:
        network: Network dell'address
        address_type: P2PK, P2SH o P2S
        is_stealth: True se lo script è un output stealth
        points: Punti (Gr, Gy, Ur, Uy) se stealth
    """
    address: str
    network: Network
    address_type: AddressType
    is_stealth: bool
    points: Optional[DerivedPointSet] = None

    def to_dict(self) -> dict:
        return {
            "address": self.address,
            "network": self.network.name.lower(),
            "type": self.address_type.name,
            "is_stealth": self.is_stealth,
            "points": self.points.to_hex() if self.points else None,
        }


# ============================================================================
# SERVICE
# ============================================================================

class StealthAddressService:
    """
    Service per generazione e ispezione di stealth address.

    Stateless tra richieste: settings e random source sono
    read-only, quindi un'istanza può servire più thread.

    Example:
        >>> service = StealthAddressService()
        >>> result = service.generate("nostealthprefix")
        >>> result.success, result.reason
        (False, 'invalid stealth key format')
    """

    def __init__(
        self,
        settings: Optional[StealthSettings] = None,
        rng: Optional[RandomSource] = None
    ):
        self.settings = settings or get_settings()
        self.rng = rng or SystemRandomSource()

    def _resolve_network(self, network: Union[Network, str, None]) -> Network:
        if network is None:
            return self.settings.get_network()
        try:
            if isinstance(network, str):
                return Network.from_name(network)
            return Network(network)
        except ValueError as e:
            raise StealthGenException(
                str(e),
                code="INVALID_NETWORK",
                details={"network": str(network)}
            ) from e

    def generate(
        self,
        stealth_key: str,
        network: Union[Network, str, None] = None,
        count: int = 1
    ) -> GenerationResult:
        """
        Genera ``count`` address indipendenti per la stealth key.

        Tutto-o-niente: se una derivazione fallisce non viene
        restituito alcun address.

        Args:
            stealth_key: Stealth key del receiver
            network: Network o nome (default: da settings)
            count: Numero di address

        Returns:
            GenerationResult: Esito tagged
        """
        try:
            network = self._resolve_network(network)
        except StealthGenException as e:
            return GenerationResult.failed(self.settings.get_network(), e)

        if count < 1:
            return GenerationResult.failed(
                network,
                StealthGenException(
                    f"count must be >= 1, got {count}",
                    code="INVALID_COUNT"
                )
            )

        explorer_url = self.settings.get_explorer_url(network)

        try:
            with PerformanceLogger(
                logger,
                "generate_stealth_address",
                threshold_ms=SLOW_GENERATION_MS
            ):
                receiver = validate_stealth_key(stealth_key)
                addresses = [
                    encode_payment_address(
                        derive(receiver, self.rng, self.settings.max_scalar_attempts),
                        network
                    )
                    for _ in range(count)
                ]
        except StealthGenException as e:
            logger.warning(
                "Stealth address generation failed",
                extra_data={"code": e.code, "reason": e.message}
            )
            return GenerationResult.failed(network, e)

        logger.info(
            "Stealth address generated",
            extra_data={
                "network": network.name.lower(),
                "count": count,
                "address": addresses[0][:16],
            }
        )

        return GenerationResult(
            success=True,
            network=network,
            addresses=addresses,
            payment_uris=[payment_request_uri(a, explorer_url) for a in addresses],
        )

    def validate_key(self, stealth_key: str) -> KeyCheck:
        """
        Valida una stealth key senza derivare nulla.

        Returns:
            KeyCheck: Esito tagged con il punto del receiver
        """
        try:
            point = validate_stealth_key(stealth_key)
        except StealthGenException as e:
            return KeyCheck(valid=False, error=e.to_dict())

        return KeyCheck(valid=True, point_hex=point.hex())

    def inspect_address(self, address: str) -> AddressInspection:
        """
        Decodifica un address e, se stealth, estrae i quattro punti.

        Raises:
            InvalidAddressError: Address invalido
        """
        decoded = decode_address(address)

        points = None
        if decoded.address_type is AddressType.P2S:
            try:
                points = parse_stealth_script(decoded.content)
            except EncodingError as e:
                logger.debug("P2S address is not a stealth output", extra_data={"reason": e.message})

        return AddressInspection(
            address=address,
            network=decoded.network,
            address_type=decoded.address_type,
            is_stealth=points is not None,
            points=points,
        )

    def payment_request_uri(self, address: str, network: Optional[Network] = None) -> str:
        """URI di payment request sull'explorer del network"""
        return payment_request_uri(
            address,
            self.settings.get_explorer_url(self._resolve_network(network))
        )


__all__ = [
    "generate_stealth_address",
    "payment_request_uri",
    "GenerationResult",
    "KeyCheck",
    "AddressInspection",
    "StealthAddressService",
]
