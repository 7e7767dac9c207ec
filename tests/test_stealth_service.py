"""
StealthGen - Service Tests
============================
Tests for the generation pipeline and tagged results.
"""

import pytest

from stealth_gen.constants import AddressType, Network
from stealth_gen.domain.addressing import decode_address, encode_address
from stealth_gen.domain.crypto_core import FixedSequenceRandomSource
from stealth_gen.domain.derivation import derive, is_addressed_to
from stealth_gen.domain.script import encode_payment_address
from stealth_gen.errors import InvalidAddressError, MalformedKeyError, StealthGenException
from stealth_gen.services.stealth_service import (
    StealthAddressService,
    generate_stealth_address,
    payment_request_uri,
)

from conftest import G_HEX, G2_HEX, make_stealth_key


class TestGenerateStealthAddress:
    """Test pure pipeline"""

    def test_known_vector(self, stealth_key, receiver_point):
        """Test address for u = 2G, r = 1, y = 2"""
        address = generate_stealth_address(
            stealth_key,
            Network.MAINNET,
            FixedSequenceRandomSource([1, 2])
        )

        expected = encode_payment_address(
            derive(receiver_point, FixedSequenceRandomSource([1, 2])),
            Network.MAINNET
        )
        assert address == expected

    def test_malformed_key_raises(self):
        """Test no derivation on malformed key"""
        rng = FixedSequenceRandomSource([1, 2])

        with pytest.raises(MalformedKeyError):
            generate_stealth_address("nostealthprefix", rng=rng)

        assert rng.remaining == 2

    def test_unlinkable_outputs(self, stealth_key):
        """Test two generations differ"""
        assert generate_stealth_address(stealth_key) != generate_stealth_address(stealth_key)


class TestStealthAddressServiceGenerate:
    """Test StealthAddressService.generate"""

    def test_success(self, test_settings, stealth_key, fixed_rng):
        service = StealthAddressService(test_settings, rng=fixed_rng)
        result = service.generate(stealth_key)

        assert result.success
        assert result.error is None
        assert result.network is Network.MAINNET
        assert len(result.addresses) == 1
        assert result.payment_uris == [
            "https://explorer.ergoplatform.com/payment-request?address=" + result.address
        ]

    def test_network_from_settings(self, testnet_settings, stealth_key):
        service = StealthAddressService(testnet_settings)
        result = service.generate(stealth_key)

        assert result.network is Network.TESTNET
        assert decode_address(result.address).network is Network.TESTNET
        assert result.payment_uris[0].startswith("https://testnet.ergoplatform.com/")

    def test_network_override(self, test_settings, stealth_key):
        service = StealthAddressService(test_settings)
        result = service.generate(stealth_key, network=Network.TESTNET)

        assert decode_address(result.address).network is Network.TESTNET

    def test_count(self, test_settings, stealth_key, receiver_secret):
        """Test multiple independent addresses"""
        service = StealthAddressService(test_settings)
        result = service.generate(stealth_key, count=3)

        assert result.success
        assert len(set(result.addresses)) == 3

        for address in result.addresses:
            inspection = service.inspect_address(address)
            assert is_addressed_to(inspection.points, receiver_secret)

    def test_invalid_count(self, test_settings, stealth_key):
        result = StealthAddressService(test_settings).generate(stealth_key, count=0)

        assert not result.success
        assert result.error_code == "INVALID_COUNT"

    def test_malformed_key(self, test_settings):
        """Test tagged failure, no address"""
        result = StealthAddressService(test_settings).generate("nostealthprefix")

        assert not result.success
        assert result.error_code == "MALFORMED_KEY"
        assert result.reason == "invalid stealth key format"
        assert result.addresses == []
        assert result.address is None

    def test_checksum_mismatch(self, test_settings, stealth_key):
        tampered = stealth_key[:-1] + ("2" if stealth_key[-1] != "2" else "3")
        result = StealthAddressService(test_settings).generate(tampered)

        assert not result.success
        assert result.error_code == "CHECKSUM_MISMATCH"

    def test_invalid_point(self, test_settings):
        key = make_stealth_key(b"\x02" + b"\xff" * 32)
        result = StealthAddressService(test_settings).generate(key)

        assert result.error_code == "INVALID_POINT"

    def test_random_source_failure_all_or_nothing(self, test_settings, stealth_key):
        """Test no partial output when entropy runs out"""
        service = StealthAddressService(
            test_settings,
            rng=FixedSequenceRandomSource([1, 2, 3])
        )
        result = service.generate(stealth_key, count=2)

        assert not result.success
        assert result.error_code == "RANDOM_SOURCE_FAILURE"
        assert result.addresses == []
        assert result.payment_uris == []

    def test_to_dict(self, test_settings, stealth_key, fixed_rng):
        data = StealthAddressService(test_settings, rng=fixed_rng).generate(stealth_key).to_dict()

        assert data["success"] is True
        assert data["network"] == "mainnet"
        assert len(data["addresses"]) == 1
        assert data["error"] is None


class TestStealthAddressServiceOther:
    """Test validate_key, inspect_address, payment_request_uri"""

    def test_validate_key(self, test_settings, stealth_key):
        check = StealthAddressService(test_settings).validate_key(stealth_key)

        assert check.valid
        assert check.point_hex == G2_HEX

    def test_validate_key_invalid(self, test_settings):
        check = StealthAddressService(test_settings).validate_key("stealth0")

        assert not check.valid
        assert check.point_hex is None
        assert check.error["error"] == "MALFORMED_KEY"

    def test_inspect_stealth_address(self, test_settings, stealth_key, fixed_rng, receiver_point):
        service = StealthAddressService(test_settings, rng=fixed_rng)
        address = service.generate(stealth_key).address

        inspection = service.inspect_address(address)

        assert inspection.is_stealth
        assert inspection.address_type is AddressType.P2S
        assert inspection.points.gr.hex() == G_HEX
        assert inspection.points.ur == receiver_point
        assert inspection.to_dict()["points"]["gr"] == G_HEX

    def test_inspect_p2pk_address(self, test_settings):
        address = encode_address(bytes.fromhex(G_HEX), Network.MAINNET, AddressType.P2PK)
        inspection = StealthAddressService(test_settings).inspect_address(address)

        assert not inspection.is_stealth
        assert inspection.address_type is AddressType.P2PK
        assert inspection.points is None

    def test_inspect_plain_p2s_address(self, test_settings):
        address = encode_address(bytes.fromhex("100104c801d191a37300"), Network.TESTNET)
        inspection = StealthAddressService(test_settings).inspect_address(address)

        assert not inspection.is_stealth
        assert inspection.network is Network.TESTNET

    def test_inspect_invalid_address(self, test_settings):
        with pytest.raises(InvalidAddressError):
            StealthAddressService(test_settings).inspect_address("invalid!")

    def test_payment_request_uri(self, test_settings):
        service = StealthAddressService(test_settings)

        assert service.payment_request_uri("9abc") == (
            "https://explorer.ergoplatform.com/payment-request?address=9abc"
        )
        assert service.payment_request_uri("3xyz", Network.TESTNET) == (
            "https://testnet.ergoplatform.com/payment-request?address=3xyz"
        )

    def test_payment_request_uri_trailing_slash(self):
        assert payment_request_uri("9abc", "https://example.org/") == (
            "https://example.org/payment-request?address=9abc"
        )


class TestNetworkResolution:
    """Test network argument handling"""

    def test_network_by_name(self, test_settings, stealth_key):
        result = StealthAddressService(test_settings).generate(stealth_key, network="Testnet")

        assert result.success
        assert result.network is Network.TESTNET

    @pytest.mark.parametrize("network", ["regtest", 0x20])
    def test_invalid_network_tagged(self, test_settings, stealth_key, network):
        """Test unknown network returns a failed result"""
        result = StealthAddressService(test_settings).generate(stealth_key, network=network)

        assert not result.success
        assert result.error_code == "INVALID_NETWORK"
        assert result.network is Network.MAINNET
        assert result.addresses == []

    def test_invalid_network_uri(self, test_settings):
        with pytest.raises(StealthGenException):
            StealthAddressService(test_settings).payment_request_uri("9abc", "regtest")
