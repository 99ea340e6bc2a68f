"""
Unit tests for EVM address and transaction hash types.
"""

import pytest

from multichain.blockchain.evm.address import (
    EvmAddress,
    EvmTransactionHash,
    has_0x_prefix,
    is_hex,
    is_hex_of_length,
)
from multichain.blockchain.types import Blockchain
from multichain.core.exceptions import InvalidAddressError, InvalidHashError

VALID_ADDRESS = "0x32Be343B94f860124dC4fEe278FDCBD38C102D88"
VALID_HASH = "0x" + "ab" * 32


class TestHexHelpers:
    """Test hex string helpers."""

    def test_has_0x_prefix(self):
        assert has_0x_prefix("0xabc")
        assert has_0x_prefix("0Xabc")
        assert not has_0x_prefix("abc")
        assert not has_0x_prefix("0")

    def test_is_hex_requires_even_length(self):
        assert is_hex("abcd")
        assert not is_hex("abc")
        assert not is_hex("zz")

    def test_is_hex_of_length(self):
        assert is_hex_of_length(VALID_ADDRESS, 20)
        assert is_hex_of_length(VALID_ADDRESS[2:], 20)
        assert not is_hex_of_length(VALID_ADDRESS, 32)
        assert not is_hex_of_length(None, 20)


class TestEvmAddress:
    """Test EvmAddress."""

    def test_valid_address(self):
        """A valid address keeps its checksum form and network."""
        address = EvmAddress(VALID_ADDRESS)

        assert str(address) == VALID_ADDRESS
        assert address.network == "ethereum"
        assert len(address.to_bytes()) == 20

    def test_lowercase_input_is_checksummed(self):
        address = EvmAddress(VALID_ADDRESS.lower(), Blockchain.POLYGON)

        assert str(address) == VALID_ADDRESS
        assert address.network == "polygon"

    @pytest.mark.parametrize(
        "value",
        [
            "0x123",
            "",
            "0x" + "zz" * 20,
            VALID_ADDRESS + "00",
            "0x32Be343B94f860124dC4fEe278FDCBD38C102D8",
        ],
    )
    def test_invalid_address(self, value):
        with pytest.raises(InvalidAddressError):
            EvmAddress(value)

    def test_equality_includes_network(self):
        assert EvmAddress(VALID_ADDRESS) == EvmAddress(VALID_ADDRESS.lower())
        assert EvmAddress(VALID_ADDRESS) != EvmAddress(VALID_ADDRESS, "polygon")
        assert len({EvmAddress(VALID_ADDRESS), EvmAddress(VALID_ADDRESS.lower())}) == 1

    def test_from_bytes(self):
        address = EvmAddress.from_bytes(bytes.fromhex(VALID_ADDRESS[2:]))

        assert str(address) == VALID_ADDRESS


class TestEvmTransactionHash:
    """Test EvmTransactionHash."""

    def test_valid_hash(self):
        tx_hash = EvmTransactionHash(VALID_HASH.upper().replace("0X", "0x"))

        assert str(tx_hash) == VALID_HASH
        assert tx_hash.to_bytes() == bytes.fromhex("ab" * 32)
        tx_hash.validate()

    @pytest.mark.parametrize("value", ["0x123", "0x" + "ab" * 31, "0x" + "gg" * 32])
    def test_invalid_hash(self, value):
        with pytest.raises(InvalidHashError):
            EvmTransactionHash(value)
