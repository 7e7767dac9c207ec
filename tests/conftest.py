"""
StealthGen - Pytest Configuration
===================================
Fixtures e configurazione per testing.

Version: 1.0.0

Vettori noti (secp256k1, forma compressa):
- receiver secret x = 2  ->  u = 2G
- scalari effimeri r = 1, y = 2  ->  Gr = G, Gy = 2G, Ur = 2G, Uy = 4G
"""

import hashlib

import base58
import pytest

# Internal imports
from stealth_gen.config import StealthSettings
from stealth_gen.domain.crypto_core import (
    CurvePoint,
    FixedSequenceRandomSource,
)


# ============================================================================
# KNOWN VECTORS
# ============================================================================

G_HEX = "0279be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
G2_HEX = "02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5"
G3_HEX = "02f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9"
G4_HEX = "02e493dbf1c10d80f3581e4904930b1404cc6c13900ee0758474fa94abe8c4cd13"

SCRIPT_SUFFIX_HEX = "ceee7300ee7301ee7302ee7303"


def make_stealth_key(main_bytes: bytes) -> str:
    """Stealth key costruita a mano (indipendente dal codice sotto test)"""
    checksum = hashlib.blake2b(main_bytes, digest_size=32).digest()[:4]
    return "stealth" + base58.b58encode(main_bytes + checksum).decode("ascii")


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================

@pytest.fixture
def test_settings():
    """Test configuration (mainnet, log silenziosi)"""
    return StealthSettings(network="mainnet", log_level="WARNING")


@pytest.fixture
def testnet_settings():
    """Test configuration su testnet"""
    return StealthSettings(network="testnet", log_level="WARNING")


# ============================================================================
# KEY FIXTURES
# ============================================================================

@pytest.fixture
def receiver_secret():
    """Scalare privato del receiver"""
    return 2


@pytest.fixture
def receiver_point():
    """u = 2G"""
    return CurvePoint(bytes.fromhex(G2_HEX))


@pytest.fixture
def stealth_key():
    """Stealth key valida per u = 2G"""
    return make_stealth_key(bytes.fromhex(G2_HEX))


# ============================================================================
# RANDOMNESS FIXTURES
# ============================================================================

@pytest.fixture
def fixed_rng():
    """Sorgente deterministica: r = 1, y = 2"""
    return FixedSequenceRandomSource([1, 2])
