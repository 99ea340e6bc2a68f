"""
Unit tests for the private-key signer.
"""

import pytest
from eth_account import Account
from eth_account.datastructures import SignedTransaction

from multichain.blockchain.evm.signer import PrivateKeySigner
from multichain.blockchain.evm.transaction import new_transaction
from multichain.blockchain.types import SIGNED_TRANSACTION_KEY, Transaction
from multichain.core.exceptions import InvalidPrivateKeyError, InvalidTransactionError


class TestPrivateKeySigner:
    """Test PrivateKeySigner."""

    def test_address_matches_key(self, account):
        assert PrivateKeySigner(account.key.hex()).address == account.address

    def test_key_without_prefix(self, account):
        key = account.key.hex()
        key = key[2:] if key.startswith("0x") else key

        assert PrivateKeySigner(key).address == account.address

    @pytest.mark.parametrize("key", ["0x1234", "not-a-key", ""])
    def test_invalid_key(self, key):
        with pytest.raises(InvalidPrivateKeyError):
            PrivateKeySigner(key)

    def test_sign_none(self, signer):
        with pytest.raises(InvalidTransactionError):
            signer.sign_transaction(None)

    def test_sign_incomplete_transaction(self, signer, recipient):
        with pytest.raises(InvalidTransactionError):
            signer.sign_transaction(Transaction(to_address=recipient, amount=1))

    def test_sign_legacy(self, signer, sender, recipient):
        tx = new_transaction(sender, recipient, 1000, nonce=0, gas_limit=21000, chain_id=1, gas_price=50)

        result = signer.sign_transaction(tx)

        signed = result.payload[SIGNED_TRANSACTION_KEY]
        assert result is tx
        assert isinstance(signed, SignedTransaction)
        assert tx.signed_tx == bytes(signed.raw_transaction)
        assert Account.recover_transaction(tx.signed_tx) == signer.address

    def test_sign_dynamic_fee(self, signer, sender, recipient):
        tx = new_transaction(
            sender,
            recipient,
            1000,
            nonce=1,
            gas_limit=21000,
            chain_id=1,
            max_fee_per_gas=100,
            max_priority_fee_per_gas=2,
        )

        signer.sign_transaction(tx)

        # EIP-2718 typed envelope
        assert tx.signed_tx[0] == 2
        assert Account.recover_transaction(tx.signed_tx) == signer.address


class TestPrivateKeySignerKeyTypes:
    @pytest.mark.parametrize("key", [None, 1234, b"\x01" * 32])
    def test_non_string_key(self, key):
        with pytest.raises(InvalidPrivateKeyError):
            PrivateKeySigner(key)
