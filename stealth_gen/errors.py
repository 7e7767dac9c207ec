"""
StealthGen - Custom Exceptions
================================
Gerarchia di eccezioni per la generazione di stealth address.

Security Level: HIGH
Version: 1.0.0

Ogni errore ha un ``code`` stabile, usato dal service layer per
costruire risultati tagged e dalla CLI per mostrare il motivo.
"""

from typing import Optional


# ============================================================================
# BASE EXCEPTION
# ============================================================================

class StealthGenException(Exception):
    """
    Eccezione base per tutte le eccezioni StealthGen.

    Attributes:
        message (str): Messaggio errore (human-readable)
        code (str): Codice errore (es. "MALFORMED_KEY")
        details (dict): Dettagli aggiuntivi
    """

    default_code: str = "STEALTHGEN_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}

        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Serializza eccezione per CLI/logging"""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================

class ConfigError(StealthGenException):
    """Errore configurazione"""
    default_code = "CONFIG_ERROR"


# ============================================================================
# STEALTH KEY ERRORS
# ============================================================================

class StealthKeyError(StealthGenException):
    """Base per errori di decoding della stealth key"""
    default_code = "STEALTH_KEY_ERROR"


class MalformedKeyError(StealthKeyError):
    """Struttura invalida: prefisso, alfabeto base58 o lunghezza"""
    default_code = "MALFORMED_KEY"


class ChecksumMismatchError(StealthKeyError):
    """Struttura valida ma checksum BLAKE2b non corrisponde"""
    default_code = "CHECKSUM_MISMATCH"


# ============================================================================
# CRYPTO ERRORS
# ============================================================================

class CryptoError(StealthGenException):
    """Errore della libreria crittografica"""
    default_code = "CRYPTO_ERROR"


class InvalidPointError(CryptoError):
    """Bytes non decodificabili come punto secp256k1 compresso"""
    default_code = "INVALID_POINT"


class RandomSourceError(CryptoError):
    """Sorgente di entropia non disponibile o esaurita (fatale)"""
    default_code = "RANDOM_SOURCE_FAILURE"


# ============================================================================
# ENCODING ERRORS
# ============================================================================

class EncodingError(StealthGenException):
    """Invariante dello script template violato"""
    default_code = "ENCODING_ERROR"


class InvalidAddressError(StealthGenException):
    """Address string non valida (alfabeto, network, checksum)"""
    default_code = "INVALID_ADDRESS"


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "StealthGenException",
    "ConfigError",
    "StealthKeyError",
    "MalformedKeyError",
    "ChecksumMismatchError",
    "CryptoError",
    "InvalidPointError",
    "RandomSourceError",
    "EncodingError",
    "InvalidAddressError",
]
