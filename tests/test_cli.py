"""
StealthGen - CLI Tests
========================
Tests for the typer command line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from stealth_gen import __version__
from stealth_gen.cli.main import app
from stealth_gen.constants import Network
from stealth_gen.domain.addressing import decode_address
from stealth_gen.logging_setup import setup_logging


runner = CliRunner()


@pytest.fixture(autouse=True)
def detach_console_logging():
    """Il callback CLI aggancia stderr del runner: sganciarlo dopo ogni test"""
    yield
    setup_logging(log_level="WARNING", enable_console=False)


class TestGenerateCommand:
    """Test `stealthgen generate`"""

    def test_generate_json(self, stealth_key):
        result = runner.invoke(app, ["generate", stealth_key, "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["success"] is True
        assert len(data["addresses"]) == 1
        assert decode_address(data["addresses"][0]).network is Network.MAINNET

    def test_generate_testnet_count(self, stealth_key):
        result = runner.invoke(
            app,
            ["generate", stealth_key, "--network", "testnet", "--count", "2", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["network"] == "testnet"
        assert len(set(data["addresses"])) == 2

    def test_generate_panel(self, stealth_key):
        result = runner.invoke(app, ["generate", stealth_key])

        assert result.exit_code == 0
        assert "Payment address generated" in result.output

    def test_generate_invalid_key(self):
        """Test error reason shown, no address"""
        result = runner.invoke(app, ["generate", "nostealthprefix"])

        assert result.exit_code == 1
        assert "invalid stealth key format" in result.output
        assert "Address:" not in result.output

    def test_generate_invalid_network(self, stealth_key):
        result = runner.invoke(app, ["generate", stealth_key, "--network", "regtest"])

        assert result.exit_code != 0


class TestOtherCommands:
    """Test validate, inspect, version"""

    def test_validate(self, stealth_key):
        result = runner.invoke(app, ["validate", stealth_key])

        assert result.exit_code == 0
        assert "Valid stealth key" in result.output

    def test_validate_invalid(self):
        result = runner.invoke(app, ["validate", "stealth0"])

        assert result.exit_code == 1
        assert "Invalid stealth key" in result.output

    def test_inspect_json(self, stealth_key):
        generated = runner.invoke(app, ["generate", stealth_key, "--json"])
        address = json.loads(generated.stdout)["addresses"][0]

        result = runner.invoke(app, ["inspect", address, "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["is_stealth"] is True
        assert data["type"] == "P2S"
        assert set(data["points"]) == {"gr", "gy", "ur", "uy"}

    def test_inspect_invalid(self):
        result = runner.invoke(app, ["inspect", "invalid!"])

        assert result.exit_code == 1
        assert "Invalid address" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
