"""
Unit tests for domain types and EVM transaction construction.
"""

import pytest

from multichain.blockchain.evm.address import EvmAddress
from multichain.blockchain.evm.transaction import new_transaction
from multichain.blockchain.types import (
    Blockchain,
    DynamicFeeFields,
    LegacyFields,
    Token,
    TokenType,
    Transaction,
    TransactionType,
)
from multichain.core.exceptions import InvalidTransactionError

from tests.conftest import RECIPIENT, TOKEN_CONTRACT


def _legacy(**overrides):
    values = {"nonce": 0, "gas_price": 50, "gas_limit": 21000, "chain_id": 1}
    values.update(overrides)
    return LegacyFields(**values)


class TestBlockchain:
    def test_evm_chains(self):
        assert Blockchain.ETHEREUM.is_evm
        assert Blockchain.BLAST.is_evm
        assert not Blockchain.BITCOIN.is_evm
        assert not Blockchain.SOLANA.is_evm
        assert not Blockchain.COSMOS.is_evm


class TestToken:
    """Test Token invariants."""

    def test_native_token(self):
        token = Token(TokenType.NATIVE, symbol="ETH")

        assert token.address is None
        assert token.decimals == 18

    def test_contract_token_requires_address(self):
        with pytest.raises(ValueError):
            Token(TokenType.ERC20)

    def test_native_token_rejects_address(self):
        with pytest.raises(ValueError):
            Token(TokenType.NATIVE, address=EvmAddress(TOKEN_CONTRACT))

    def test_negative_decimals(self):
        with pytest.raises(ValueError):
            Token(TokenType.ERC20, address=EvmAddress(TOKEN_CONTRACT), decimals=-1)


class TestFeeFields:
    """Test typed fee field variants."""

    def test_legacy_tx_dict(self):
        assert _legacy(data=b"\x01").to_tx_dict() == {
            "nonce": 0,
            "gasPrice": 50,
            "gas": 21000,
            "chainId": 1,
            "data": b"\x01",
        }

    def test_dynamic_tx_dict_is_type_2(self):
        fields = DynamicFeeFields(
            nonce=3, max_fee_per_gas=100, max_priority_fee_per_gas=2, gas_limit=21000, chain_id=1
        )

        assert fields.to_tx_dict()["type"] == 2
        assert fields.to_tx_dict()["maxPriorityFeePerGas"] == 2

    def test_priority_fee_above_max_fee(self):
        with pytest.raises(InvalidTransactionError):
            DynamicFeeFields(
                nonce=0, max_fee_per_gas=1, max_priority_fee_per_gas=2, gas_limit=21000, chain_id=1
            )

    @pytest.mark.parametrize("name", ["nonce", "gas_price", "gas_limit", "chain_id"])
    def test_negative_values_rejected(self, name):
        with pytest.raises(InvalidTransactionError):
            _legacy(**{name: -1})

    def test_data_must_be_bytes(self):
        with pytest.raises(InvalidTransactionError):
            _legacy(data="0x01")


class TestTransaction:
    """Test Transaction.validate and setters."""

    def _transaction(self, **overrides):
        values = {
            "from_address": EvmAddress(RECIPIENT),
            "to_address": EvmAddress(TOKEN_CONTRACT),
            "amount": 1000,
            "fields": _legacy(),
        }
        values.update(overrides)
        return Transaction(**values)

    def test_valid_transaction(self):
        self._transaction().validate()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"from_address": None},
            {"to_address": None},
            {"amount": -1},
            {"amount": 0},
            {"amount": 1.5},
            {"fields": None},
            {"payload": {"data": "0x"}},
        ],
    )
    def test_invalid_transaction(self, overrides):
        with pytest.raises(InvalidTransactionError):
            self._transaction(**overrides).validate()

    def test_zero_amount_contract_call(self):
        self._transaction(amount=0, type=TransactionType.CONTRACT_CALL).validate()

    def test_data_falls_back_to_payload(self):
        tx = self._transaction(payload={"data": b"\xaa"})

        assert tx.data == b"\xaa"

        tx.fields = _legacy(data=b"\xbb")
        assert tx.data == b"\xbb"

    def test_setters(self):
        tx = self._transaction()
        tx.set_block_number(7)
        tx.set_signed_tx(b"\x01")
        tx.set_payload("key", "value")

        assert tx.block_number == 7
        assert tx.signed_tx == b"\x01"
        assert tx.payload == {"key": "value"}


class TestNewTransaction:
    """Test new_transaction fee model selection."""

    def test_legacy(self):
        tx = new_transaction(
            EvmAddress(RECIPIENT), EvmAddress(TOKEN_CONTRACT), 1, nonce=0, gas_limit=21000, chain_id=1, gas_price=5
        )

        assert isinstance(tx.fields, LegacyFields)

    def test_dynamic(self):
        tx = new_transaction(
            EvmAddress(RECIPIENT),
            EvmAddress(TOKEN_CONTRACT),
            1,
            nonce=0,
            gas_limit=21000,
            chain_id=1,
            max_fee_per_gas=10,
            max_priority_fee_per_gas=1,
        )

        assert isinstance(tx.fields, DynamicFeeFields)

    def test_both_fee_models(self):
        with pytest.raises(ValueError):
            new_transaction(
                EvmAddress(RECIPIENT),
                EvmAddress(TOKEN_CONTRACT),
                1,
                nonce=0,
                gas_limit=21000,
                chain_id=1,
                gas_price=5,
                max_fee_per_gas=10,
                max_priority_fee_per_gas=1,
            )

    def test_no_fee_model(self):
        with pytest.raises(ValueError):
            new_transaction(
                EvmAddress(RECIPIENT), EvmAddress(TOKEN_CONTRACT), 1, nonce=0, gas_limit=21000, chain_id=1
            )
