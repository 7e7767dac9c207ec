"""
StealthGen - Address Tests
============================
Unit tests for address encoding, decoding and validation.
"""

import base58
import pytest

from stealth_gen.constants import AddressType, Network, P2PK_TREE_PREFIX
from stealth_gen.domain.addressing import (
    decode_address,
    encode_address,
    script_to_address,
    validate_address,
)
from stealth_gen.domain.crypto_core import compute_checksum
from stealth_gen.errors import InvalidAddressError

from conftest import G_HEX


SAMPLE_SCRIPT = bytes.fromhex("100104c801d191a37300")


def _raw_address(body: bytes) -> str:
    return base58.b58encode(body + compute_checksum(body)).decode("ascii")


class TestEncodeAddress:
    """Test address encoding"""

    def test_head_byte(self):
        """Test head = network + type"""
        address = encode_address(SAMPLE_SCRIPT, Network.TESTNET, AddressType.P2S)
        raw = base58.b58decode(address)

        assert raw[0] == 0x13
        assert raw[1:-4] == SAMPLE_SCRIPT
        assert raw[-4:] == compute_checksum(raw[:-4])

    def test_empty_content(self):
        """Test empty content rejection"""
        with pytest.raises(InvalidAddressError):
            encode_address(b"", Network.MAINNET)

    def test_p2pk_tree(self):
        """Test P2PK trees become P2PK addresses"""
        pubkey = bytes.fromhex(G_HEX)
        address = script_to_address(P2PK_TREE_PREFIX + pubkey, Network.MAINNET)
        decoded = decode_address(address)

        assert decoded.address_type is AddressType.P2PK
        assert decoded.content == pubkey
        assert decoded.to_script() == P2PK_TREE_PREFIX + pubkey

    def test_p2s_tree(self):
        """Test other trees become P2S addresses"""
        decoded = decode_address(script_to_address(SAMPLE_SCRIPT, Network.MAINNET))

        assert decoded.address_type is AddressType.P2S
        assert decoded.to_script() == SAMPLE_SCRIPT

    def test_ergo_mainnet_vector(self):
        """Test known Ergo mainnet P2S address"""
        address = script_to_address(bytes.fromhex("10010101d17300"), Network.MAINNET)

        assert address == "4MQyML64GnzMxZgm"
        assert decode_address(address).content.hex() == "10010101d17300"


class TestDecodeAddress:
    """Test address decoding"""

    def test_roundtrip_fields(self):
        address = encode_address(SAMPLE_SCRIPT, Network.MAINNET)
        decoded = decode_address(address)

        assert decoded.network is Network.MAINNET
        assert decoded.address_type is AddressType.P2S
        assert decoded.content == SAMPLE_SCRIPT

    def test_checksum_mismatch(self):
        """Test tampered checksum"""
        raw = bytearray(base58.b58decode(encode_address(SAMPLE_SCRIPT, Network.MAINNET)))
        raw[-1] ^= 0x01

        with pytest.raises(InvalidAddressError):
            decode_address(base58.b58encode(bytes(raw)).decode("ascii"))

    def test_invalid_characters(self):
        with pytest.raises(InvalidAddressError):
            decode_address("9f0OIl")

    def test_too_short(self):
        with pytest.raises(InvalidAddressError):
            decode_address(_raw_address(b"\x03"))

    def test_unknown_type(self):
        """Test type nibble outside P2PK/P2SH/P2S"""
        with pytest.raises(InvalidAddressError):
            decode_address(_raw_address(b"\x05" + SAMPLE_SCRIPT))

    def test_unknown_network(self):
        """Test network nibble outside mainnet/testnet"""
        with pytest.raises(InvalidAddressError):
            decode_address(_raw_address(b"\x23" + SAMPLE_SCRIPT))

    def test_p2pk_wrong_length(self):
        with pytest.raises(InvalidAddressError):
            decode_address(_raw_address(b"\x01" + bytes.fromhex(G_HEX)[:32]))

    def test_p2sh_has_no_script(self):
        """Test P2SH cannot be turned back into a tree"""
        decoded = decode_address(_raw_address(b"\x02" + b"\xab" * 24))

        assert decoded.address_type is AddressType.P2SH
        with pytest.raises(InvalidAddressError):
            decoded.to_script()


class TestValidateAddress:
    """Test boolean validation"""

    def test_valid(self):
        address = encode_address(SAMPLE_SCRIPT, Network.MAINNET)

        assert validate_address(address)
        assert validate_address(address, Network.MAINNET)
        assert not validate_address(address, Network.TESTNET)

    def test_invalid(self):
        assert not validate_address("not-an-address")
        assert not validate_address("")
