"""
StealthGen - Configuration Management
=======================================
Gestione centralizzata configurazione con Pydantic Settings.
Supporta environment variables, file .env, override runtime.

Version: 1.0.0

Features:
- Validazione automatica tipi
- Environment variables con prefisso STEALTHGEN_
- File .env support

La configurazione seleziona solo i default di service e CLI
(network, explorer, logging): il core crittografico non la legge.
"""

from pathlib import Path
from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stealth_gen.constants import (
    Network,
    DEFAULT_EXPLORER_URLS,
    MAX_SCALAR_ATTEMPTS,
)


# ============================================================================
# MAIN CONFIGURATION CLASS
# ============================================================================

class StealthSettings(BaseSettings):
    """
    Configurazione principale StealthGen.

    Example:
        # Da environment
        export STEALTHGEN_NETWORK=testnet
        export STEALTHGEN_LOG_LEVEL=DEBUG

        # Da codice
        config = StealthSettings(network="testnet")
    """

    model_config = SettingsConfigDict(
        env_prefix='STEALTHGEN_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    # ========================================================================
    # NETWORK SETTINGS
    # ========================================================================

    network: str = Field(
        default="mainnet",
        description="Network di default per gli address: mainnet, testnet"
    )

    explorer_url_mainnet: str = Field(
        default=DEFAULT_EXPLORER_URLS[Network.MAINNET],
        description="Base URL explorer mainnet (payment-request URI)"
    )

    explorer_url_testnet: str = Field(
        default=DEFAULT_EXPLORER_URLS[Network.TESTNET],
        description="Base URL explorer testnet"
    )

    # ========================================================================
    # DERIVATION
    # ========================================================================

    max_scalar_attempts: int = Field(
        default=MAX_SCALAR_ATTEMPTS,
        ge=1,
        le=1024,
        description="Tentativi massimi di rejection sampling per scalare"
    )

    # ========================================================================
    # LOGGING
    # ========================================================================

    log_level: str = Field(
        default="WARNING",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL"
    )

    log_to_file: bool = Field(
        default=False,
        description="Scrivi log su file con rotation"
    )

    log_dir: Path = Field(
        default=Path("./logs"),
        description="Directory log files"
    )

    log_format: str = Field(
        default="json",
        description="Formato log su file: json, text"
    )

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Valida log level"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Valida formato log"""
        valid_formats = ['json', 'text']
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid log_format: {v}. Must be one of {valid_formats}")
        return v_lower

    @field_validator('network')
    @classmethod
    def validate_network(cls, v: str) -> str:
        """Valida network type"""
        return Network.from_name(v).name.lower()

    @field_validator('explorer_url_mainnet', 'explorer_url_testnet')
    @classmethod
    def validate_explorer_url(cls, v: str) -> str:
        """Valida URL explorer (http/https, senza slash finale)"""
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"Invalid explorer URL: {v}. Expected http(s)://host")
        return v.rstrip("/")

    # ========================================================================
    # HELPER METHODS
    # ========================================================================

    def get_network(self) -> Network:
        """Network di default come enum"""
        return Network.from_name(self.network)

    def is_mainnet(self) -> bool:
        return self.get_network() is Network.MAINNET

    def get_explorer_url(self, network: Optional[Network] = None) -> str:
        """Base URL explorer per network"""
        network = self.get_network() if network is None else network
        if network is Network.MAINNET:
            return self.explorer_url_mainnet
        return self.explorer_url_testnet

    def to_dict(self) -> dict:
        return self.model_dump()

    def __repr__(self) -> str:
        return (
            f"StealthSettings("
            f"network={self.network}, "
            f"log_level={self.log_level}, "
            f"log_to_file={self.log_to_file})"
        )


# ============================================================================
# SINGLETON INSTANCE
# ============================================================================

@lru_cache(maxsize=1)
def get_settings() -> StealthSettings:
    """
    Ottieni singleton instance di StealthSettings.

    Returns:
        StealthSettings: Instance configurazione

    Example:
        >>> get_settings().network
        'mainnet'
    """
    return StealthSettings()


def reload_settings() -> StealthSettings:
    """
    Ricarica settings (invalida cache).

    Usare quando si cambiano environment variables a runtime.
    """
    get_settings.cache_clear()
    return get_settings()


def override_settings(**kwargs) -> StealthSettings:
    """
    Crea settings con valori custom (non tocca il singleton).

    Example:
        >>> override_settings(network="testnet").is_mainnet()
        False
    """
    return StealthSettings(**kwargs)


__all__ = [
    "StealthSettings",
    "get_settings",
    "reload_settings",
    "override_settings",
]
