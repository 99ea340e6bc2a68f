"""Private-key transaction signer for EVM chains.

Uses eth-account for key handling and signing.
"""

import logging

from eth_account import Account
from eth_account.datastructures import SignedTransaction

from multichain.blockchain.base import TransactionSigner
from multichain.blockchain.types import SIGNED_TRANSACTION_KEY, Transaction
from multichain.core.exceptions import (
    InvalidPrivateKeyError,
    InvalidTransactionError,
    TransactionSigningError,
)

logger = logging.getLogger(__name__)


class PrivateKeySigner(TransactionSigner):
    """Signs EVM transactions with a locally held private key."""

    def __init__(self, private_key: str) -> None:
        try:
            if not private_key.startswith(("0x", "0X")):
                private_key = "0x" + private_key
            self._account = Account.from_key(private_key)
        except Exception as e:
            raise InvalidPrivateKeyError.wrap(e) from e

    @property
    def address(self) -> str:
        """Checksum address of the signing key."""
        return self._account.address

    def sign_transaction(self, tx: Transaction | None) -> Transaction:
        """Sign ``tx`` and store the result on it.

        The raw encoding is set with ``set_signed_tx`` and the
        ``SignedTransaction`` is stored under ``SIGNED_TRANSACTION_KEY``.
        """
        if tx is None:
            raise InvalidTransactionError("invalid transaction: nothing to sign")
        tx.validate()

        tx_dict = tx.fields.to_tx_dict()
        tx_dict["to"] = str(tx.to_address)
        tx_dict["value"] = tx.amount
        if not tx_dict["data"]:
            tx_dict["data"] = tx.data

        try:
            signed: SignedTransaction = self._account.sign_transaction(tx_dict)
        except Exception as e:
            raise TransactionSigningError.wrap(e) from e

        tx.set_signed_tx(bytes(signed.raw_transaction))
        tx.set_payload(SIGNED_TRANSACTION_KEY, signed)
        logger.debug(f"Signed transaction {signed.hash.hex()} from {self._account.address}")
        return tx
