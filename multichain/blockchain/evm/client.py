"""EVM node client abstraction.

``NodeClient`` is the RPC surface the manager depends on; ``Web3NodeClient``
implements it with web3.py's ``AsyncWeb3``.
"""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from web3 import AsyncWeb3
from web3.exceptions import TransactionNotFound

logger = logging.getLogger(__name__)


class NodeClient(Protocol):
    """RPC operations used by the EVM manager.

    Transactions and receipts are JSON-RPC shaped mappings (``from``, ``to``,
    ``value``, ``gasPrice``, ``status``, ``gasUsed``, ``logs`` ...).
    """

    async def balance_at(self, address: str, block: int | str | None = None) -> int: ...

    async def call_contract(self, message: dict[str, Any], block: int | str | None = None) -> bytes: ...

    async def send_raw_transaction(self, raw_transaction: bytes) -> bytes: ...

    async def transaction_by_hash(self, tx_hash: str) -> tuple[Mapping[str, Any], bool]:
        """Return the transaction and whether it is still pending."""
        ...

    async def transaction_receipt(self, tx_hash: str) -> Mapping[str, Any] | None:
        """Return the receipt, or None if the node has none yet."""
        ...

    async def close(self) -> None: ...


class NodeClientFactory(Protocol):
    async def dial(self, url: str) -> NodeClient: ...


class Web3NodeClient:
    """``NodeClient`` backed by ``AsyncWeb3``."""

    def __init__(self, w3: AsyncWeb3) -> None:
        self._w3 = w3

    @property
    def w3(self) -> AsyncWeb3:
        return self._w3

    async def balance_at(self, address: str, block: int | str | None = None) -> int:
        return await self._w3.eth.get_balance(
            self._w3.to_checksum_address(address),
            block_identifier=block if block is not None else "latest",
        )

    async def call_contract(self, message: dict[str, Any], block: int | str | None = None) -> bytes:
        result = await self._w3.eth.call(
            message,
            block_identifier=block if block is not None else "latest",
        )
        return bytes(result)

    async def send_raw_transaction(self, raw_transaction: bytes) -> bytes:
        return bytes(await self._w3.eth.send_raw_transaction(raw_transaction))

    async def transaction_by_hash(self, tx_hash: str) -> tuple[Mapping[str, Any], bool]:
        tx = await self._w3.eth.get_transaction(tx_hash)
        return tx, tx.get("blockNumber") is None

    async def transaction_receipt(self, tx_hash: str) -> Mapping[str, Any] | None:
        try:
            return await self._w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None

    async def close(self) -> None:
        if hasattr(self._w3.provider, "disconnect"):
            await self._w3.provider.disconnect()


class Web3ClientFactory:
    """Creates connected ``Web3NodeClient`` instances over HTTP(S)."""

    async def dial(self, url: str) -> Web3NodeClient:
        """Connect to ``url`` and confirm the node answers.

        Raises:
            ValueError: If the URL scheme is not http or https
        """
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"unsupported RPC URL scheme: {url!r}")

        w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url))
        client = Web3NodeClient(w3)
        # An HTTP provider is lazy; ask for the chain id to surface dial errors now.
        # Timeouts and cancellation arrive as CancelledError, so close on those too.
        try:
            chain_id = await w3.eth.chain_id
        except BaseException:
            await client.close()
            raise
        logger.info(f"Connected to EVM node {url} (chain id {chain_id})")
        return client
