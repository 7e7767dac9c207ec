"""
StealthGen - Cryptographic Core Layer
=======================================
Primitive crittografiche di basso livello per la derivazione stealth.

Security Level: CRITICAL
Version: 1.0.0

SECURITY NOTICE:
Questo modulo implementa primitive crittografiche critiche.
Ogni modifica deve essere sottoposta a security audit.

Algorithms:
- Hash: BLAKE2b-256 (checksum stealth key e address)
- Curve: secp256k1, scalar multiplication constant-time (libsecp256k1)
- Randomness: sorgente iniettata, default ``secrets`` (CSPRNG di sistema)

Dependencies:
- coincurve (binding libsecp256k1)
- hashlib (stdlib)
"""

import hashlib
import secrets
import threading
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Union

from coincurve import PublicKey

from stealth_gen.constants import (
    SECP256K1_N,
    SECP256K1_G_COMPRESSED,
    COMPRESSED_POINT_SIZE,
    SCALAR_SIZE,
    MAX_SCALAR_ATTEMPTS,
    BLAKE2B_DIGEST_SIZE,
    STEALTH_CHECKSUM_SIZE,
)
from stealth_gen.errors import (
    CryptoError,
    InvalidPointError,
    RandomSourceError,
)
from stealth_gen.logging_setup import get_logger


# ============================================================================
# MODULE LOGGER
# ============================================================================

logger = get_logger("crypto")


# ============================================================================
# HASH FUNCTIONS
# ============================================================================

def compute_blake2b(data: bytes, digest_size: int = BLAKE2B_DIGEST_SIZE) -> bytes:
    """
    Compute BLAKE2b hash (unkeyed).

    Args:
        data: Input data
        digest_size: Output size in bytes (1-64, default 32)

    Returns:
        bytes: Hash digest

    Examples:
        >>> len(compute_blake2b(b"stealth"))
        32
    """
    if not isinstance(data, (bytes, bytearray)):
        raise CryptoError(
            f"compute_blake2b requires bytes, got {type(data).__name__}",
            code="INVALID_INPUT_TYPE"
        )

    if not (1 <= digest_size <= 64):
        raise CryptoError(
            f"Invalid digest_size: {digest_size}. Must be 1-64",
            code="INVALID_DIGEST_SIZE"
        )

    return hashlib.blake2b(bytes(data), digest_size=digest_size).digest()


def compute_checksum(data: bytes) -> bytes:
    """
    Checksum a 4 byte: primi 4 byte di BLAKE2b-256(data).

    Usato sia dalla stealth key sia dall'address encoding.
    Rileva errori di trascrizione, non protegge da falsificazioni.
    """
    return compute_blake2b(data)[:STEALTH_CHECKSUM_SIZE]


# ============================================================================
# RANDOM SOURCES
# ============================================================================

class RandomSource(Protocol):
    """
    Capability di entropia iniettata nella derivazione.

    ``read(size)`` deve restituire esattamente ``size`` byte uniformi
    oppure sollevare RandomSourceError. Mai fallback a sorgenti deboli.
    """

    def read(self, size: int) -> bytes:
        ...


class SystemRandomSource:
    """
    Sorgente di default basata su ``secrets`` (os.urandom).

    Thread-safe: può essere condivisa tra derivazioni concorrenti.
    """

    def read(self, size: int) -> bytes:
        try:
            return secrets.token_bytes(size)
        except (OSError, NotImplementedError) as e:
            logger.critical("System entropy source unavailable", extra_data={"error": str(e)})
            raise RandomSourceError(
                f"System random source failed: {e}",
                details={"requested_bytes": size}
            ) from e

    def __repr__(self) -> str:
        return "SystemRandomSource()"


class FixedSequenceRandomSource:
    """
    Sorgente deterministica a sequenza fissa, per test e vettori noti.

    Ogni chiamata a ``read`` consuma il prossimo elemento della sequenza.
    Gli interi sono convertiti in 32 byte big-endian.

    Example:
        >>> rng = FixedSequenceRandomSource([1, 2])
        >>> int.from_bytes(rng.read(32), "big")
        1
    """

    def __init__(self, chunks: Iterable[Union[int, bytes]]):
        self._chunks = [self._to_bytes(chunk) for chunk in chunks]
        self._position = 0
        self._lock = threading.Lock()

    @staticmethod
    def _to_bytes(chunk: Union[int, bytes]) -> bytes:
        if isinstance(chunk, int):
            return chunk.to_bytes(SCALAR_SIZE, 'big')
        return bytes(chunk)

    @property
    def remaining(self) -> int:
        return len(self._chunks) - self._position

    def read(self, size: int) -> bytes:
        with self._lock:
            if self._position >= len(self._chunks):
                raise RandomSourceError(
                    "Fixed random sequence exhausted",
                    details={"consumed": self._position}
                )
            chunk = self._chunks[self._position]
            self._position += 1

        if len(chunk) != size:
            raise RandomSourceError(
                f"Fixed random chunk has {len(chunk)} bytes, expected {size}"
            )
        return chunk


def sample_scalar(
    rng: RandomSource,
    max_attempts: int = MAX_SCALAR_ATTEMPTS
) -> int:
    """
    Campiona uno scalare uniforme in [1, n-1].

    Rejection sampling: 32 byte big-endian, scartati se 0 o >= n.
    Nessuna riduzione modulare, quindi nessun bias.

    Args:
        rng: Sorgente di entropia
        max_attempts: Tentativi prima di dichiarare la sorgente guasta

    Returns:
        int: Scalare valido

    Raises:
        RandomSourceError: Sorgente guasta o tentativi esauriti
    """
    for _ in range(max_attempts):
        data = rng.read(SCALAR_SIZE)

        if not isinstance(data, (bytes, bytearray)) or len(data) != SCALAR_SIZE:
            raise RandomSourceError(
                "Random source returned malformed output",
                details={"expected_bytes": SCALAR_SIZE}
            )

        candidate = int.from_bytes(data, 'big')
        if 0 < candidate < SECP256K1_N:
            return candidate

    raise RandomSourceError(
        f"No valid scalar after {max_attempts} attempts",
        details={"max_attempts": max_attempts}
    )


# ============================================================================
# CURVE POINTS
# ============================================================================

def _scalar_bytes(scalar: int) -> bytes:
    if not isinstance(scalar, int) or not (0 < scalar < SECP256K1_N):
        raise CryptoError("Scalar out of range [1, n-1]", code="INVALID_SCALAR")
    return scalar.to_bytes(SCALAR_SIZE, 'big')


@dataclass(frozen=True)
class CurvePoint:
    """
    Punto valido del gruppo secp256k1, in forma compressa (33 bytes).

    La costruzione verifica lunghezza, prefisso (0x02/0x03) e
    appartenenza alla curva; un punto invalido non può esistere.

    Attributes:
        compressed: Encoding compresso canonico
    """
    compressed: bytes
    _key: PublicKey = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        data = self.compressed
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidPointError(
                f"Point must be bytes, got {type(data).__name__}"
            )
        data = bytes(data)

        if len(data) != COMPRESSED_POINT_SIZE:
            raise InvalidPointError(
                f"Invalid compressed point length: {len(data)}",
                details={"expected": COMPRESSED_POINT_SIZE}
            )

        if data[0] not in (0x02, 0x03):
            raise InvalidPointError(
                f"Invalid compressed point prefix: 0x{data[0]:02x}"
            )

        try:
            key = PublicKey(data)
        except ValueError as e:
            raise InvalidPointError("Bytes are not a point on secp256k1") from e

        object.__setattr__(self, "compressed", key.format(compressed=True))
        object.__setattr__(self, "_key", key)

    def multiply(self, scalar: int) -> "CurvePoint":
        """
        Scalar multiplication constant-time: ``self · scalar``.

        Raises:
            CryptoError: Scalare fuori range o errore libreria
        """
        try:
            product = self._key.multiply(_scalar_bytes(scalar))
        except ValueError as e:
            raise CryptoError(f"Scalar multiplication failed: {e}", code="EC_MUL_ERROR") from e
        return CurvePoint(product.format(compressed=True))

    def hex(self) -> str:
        return self.compressed.hex()

    def __bytes__(self) -> bytes:
        return self.compressed

    def __repr__(self) -> str:
        return f"CurvePoint({self.compressed.hex()[:16]}...)"


# Generator g: costante di processo, immutabile e condivisibile tra thread
GENERATOR = CurvePoint(SECP256K1_G_COMPRESSED)


def generator_multiply(scalar: int) -> CurvePoint:
    """
    ``g · scalar`` con la moltiplicazione a base fissa di libsecp256k1.
    """
    try:
        key = PublicKey.from_secret(_scalar_bytes(scalar))
    except ValueError as e:
        raise CryptoError(f"Generator multiplication failed: {e}", code="EC_MUL_ERROR") from e
    return CurvePoint(key.format(compressed=True))


def decode_point(data: bytes) -> CurvePoint:
    """
    Decodifica punto compresso.

    Raises:
        InvalidPointError: Lunghezza, prefisso o curve membership invalidi
    """
    return CurvePoint(data)


def encode_point(point: CurvePoint) -> bytes:
    """
    Encoding compresso (33 bytes: prefisso parità + x).

    Examples:
        >>> decode_point(encode_point(GENERATOR)) == GENERATOR
        True
    """
    return point.compressed


__all__ = [
    "compute_blake2b",
    "compute_checksum",
    "RandomSource",
    "SystemRandomSource",
    "FixedSequenceRandomSource",
    "sample_scalar",
    "CurvePoint",
    "GENERATOR",
    "generator_multiply",
    "decode_point",
    "encode_point",
]
