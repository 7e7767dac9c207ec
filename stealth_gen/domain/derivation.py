"""
StealthGen - Stealth Derivation Engine
========================================
Derivazione ECDH dual-key dei quattro punti dell'output stealth.

Security Level: CRITICAL
Version: 1.0.0

Formula (u = punto del receiver, g = generator):
- Campiona scalari effimeri r, y uniformi in [1, n-1]
- Gr = g·r,  Gy = g·y      (controparti pubbliche)
- Ur = u·r,  Uy = u·y      (shared secrets Diffie-Hellman)

Il receiver, che conosce x con u = g·x, riconosce l'output
verificando Gr·x == Ur e Gy·x == Uy.

SECURITY NOTICE:
r e y restano locali a derive(): mai loggati, restituiti o riusati.
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from stealth_gen.constants import MAX_SCALAR_ATTEMPTS
from stealth_gen.domain.crypto_core import (
    CurvePoint,
    RandomSource,
    SystemRandomSource,
    generator_multiply,
    sample_scalar,
)
from stealth_gen.logging_setup import get_logger


logger = get_logger("derivation")

_DEFAULT_RNG = SystemRandomSource()


@dataclass(frozen=True)
class DerivedPointSet:
    """
    I quattro punti pubblici di un output stealth, in ordine di script.

    Attributes:
        gr: g·r
        gy: g·y
        ur: u·r
        uy: u·y
    """
    gr: CurvePoint
    gy: CurvePoint
    ur: CurvePoint
    uy: CurvePoint

    def __iter__(self) -> Iterator[CurvePoint]:
        return iter((self.gr, self.gy, self.ur, self.uy))

    def to_hex(self) -> dict:
        """Serializza in hex compresso (per CLI/JSON)"""
        return {
            "gr": self.gr.hex(),
            "gy": self.gy.hex(),
            "ur": self.ur.hex(),
            "uy": self.uy.hex(),
        }


def derive(
    receiver: CurvePoint,
    rng: Optional[RandomSource] = None,
    max_attempts: int = MAX_SCALAR_ATTEMPTS
) -> DerivedPointSet:
    """
    Deriva un nuovo set di punti stealth per il receiver.

    Args:
        receiver: Punto ``u`` estratto dalla stealth key
        rng: Sorgente di entropia (default: CSPRNG di sistema)
        max_attempts: Tentativi di rejection sampling per scalare

    Returns:
        DerivedPointSet: (Gr, Gy, Ur, Uy)

    Raises:
        RandomSourceError: Entropia non disponibile
        CryptoError: Errore della libreria di curva

    Examples:
        >>> from stealth_gen.domain.crypto_core import GENERATOR, FixedSequenceRandomSource
        >>> points = derive(GENERATOR, FixedSequenceRandomSource([1, 2]))
        >>> points.gr == GENERATOR
        True
    """
    rng = _DEFAULT_RNG if rng is None else rng

    r = sample_scalar(rng, max_attempts)
    y = sample_scalar(rng, max_attempts)

    points = DerivedPointSet(
        gr=generator_multiply(r),
        gy=generator_multiply(y),
        ur=receiver.multiply(r),
        uy=receiver.multiply(y),
    )
    del r, y

    logger.debug(
        "Stealth points derived",
        extra_data={
            "receiver": receiver.hex()[:16],
            "gr": points.gr.hex()[:16],
        }
    )

    return points


def is_addressed_to(points: DerivedPointSet, secret: int) -> bool:
    """
    Check lato receiver: l'output appartiene alla chiave ``u = g·secret``?

    Verifica Gr·secret == Ur e Gy·secret == Uy
    (commutatività della moltiplicazione scalare).

    Args:
        points: Punti letti dallo script
        secret: Scalare privato del receiver

    Returns:
        bool: True se l'output è indirizzato al receiver
    """
    return (
        points.gr.multiply(secret) == points.ur
        and points.gy.multiply(secret) == points.uy
    )


__all__ = [
    "DerivedPointSet",
    "derive",
    "is_addressed_to",
]
