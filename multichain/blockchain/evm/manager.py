"""EVM blockchain manager implementation.

Works with any EVM-compatible chain through a ``NodeClient`` obtained from a
``NodeClientFactory`` (web3.py by default) and an injected
``TransactionSigner``.
"""

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from typing import Any, TypeVar

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_account.datastructures import SignedTransaction
from eth_utils import (
    filter_abi_by_name,
    function_abi_to_4byte_selector,
    get_abi_input_types,
    get_abi_output_types,
)
from web3 import Web3

from multichain.blockchain.base import BlockchainManager, ManagerState, TransactionSigner
from multichain.blockchain.evm.address import EvmAddress, EvmTransactionHash
from multichain.blockchain.evm.client import NodeClient, NodeClientFactory, Web3ClientFactory
from multichain.blockchain.evm.errors import classify_submission_error
from multichain.blockchain.evm.recovery import (
    DYNAMIC_FEE_TX_TYPE,
    as_bytes,
    as_int,
    recover_sender,
    transaction_type,
)
from multichain.blockchain.types import (
    SIGNED_TRANSACTION_KEY,
    Address,
    Blockchain,
    Event,
    Log,
    Token,
    TokenType,
    Transaction,
    TransactionDetails,
    TransactionStatus,
)
from multichain.core.config import Settings, get_settings
from multichain.core.exceptions import (
    AlreadyStartedError,
    BalanceQueryError,
    ChainManagerError,
    ClientNotStartedError,
    ConnectionCanceledError,
    ConnectionTimeoutError,
    ContractCallError,
    InvalidAddressError,
    InvalidTransactionError,
    NodeConnectionError,
    RequestTimeoutError,
    TransactionRetrievalError,
    TransactionSigningError,
    UnsupportedTokenTypeError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Minimal ERC-20 ABI fragment for balance queries
ERC20_ABI = [
    {
        "constant": True,
        "inputs": [{"name": "_owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "balance", "type": "uint256"}],
        "type": "function",
    },
]

RECEIPT_STATUS_SUCCESSFUL = 1


class EvmManager(BlockchainManager):
    """Blockchain manager for EVM-compatible chains.

    Lifecycle transitions are serialized with a lock; every other operation
    reads the client handle once and fails with ``ClientNotStartedError``
    unless the manager is started.
    """

    def __init__(
        self,
        url: str,
        signer: TransactionSigner | None = None,
        client_factory: NodeClientFactory | None = None,
        network: Blockchain | str = Blockchain.ETHEREUM,
        settings: Settings | None = None,
    ) -> None:
        self._url = url
        self._signer = signer
        self._factory = client_factory or Web3ClientFactory()
        self._network = network.value if isinstance(network, Blockchain) else str(network)
        self._settings = settings or get_settings()
        self._client: NodeClient | None = None
        self._state = ManagerState.UNSTARTED
        self._lock = asyncio.Lock()

    @property
    def chain_code(self) -> str:
        return self._network

    @property
    def state(self) -> ManagerState:
        return self._state

    # ============ Lifecycle ============

    async def start(self, timeout: float | None = None) -> None:
        """Dial the node.

        Raises:
            AlreadyStartedError: If already started
            ConnectionCanceledError: If dialing was canceled
            ConnectionTimeoutError: If dialing exceeded ``timeout``
            NodeConnectionError: For any other dial failure
        """
        async with self._lock:
            if self._state is ManagerState.STARTED:
                raise AlreadyStartedError(details={"chain": self._network})

            dial_timeout = timeout if timeout is not None else self._settings.dial_timeout
            try:
                async with asyncio.timeout(dial_timeout):
                    client = await self._factory.dial(self._url)
            except asyncio.CancelledError as e:
                task = asyncio.current_task()
                if task is not None and task.cancelling():
                    task.uncancel()
                raise ConnectionCanceledError.wrap(e, url=self._url) from e
            except TimeoutError as e:
                raise ConnectionTimeoutError.wrap(e, url=self._url) from e
            except Exception as e:
                raise NodeConnectionError.wrap(e, url=self._url) from e

            self._client = client
            self._state = ManagerState.STARTED
        logger.info(f"{self._network} manager started ({self._url})")

    async def stop(self) -> None:
        """Release the client.

        Closing is shielded from cancellation and close failures are only
        logged.
        """
        async with self._lock:
            client = self._client
            if client is None or self._state is not ManagerState.STARTED:
                raise ClientNotStartedError(details={"chain": self._network})
            self._client = None
            self._state = ManagerState.STOPPED

        try:
            await asyncio.shield(client.close())
        except Exception as e:
            logger.warning(f"Error closing {self._network} client: {e}")
        logger.info(f"{self._network} manager stopped")

    def _require_client(self) -> NodeClient:
        client = self._client
        if client is None or self._state is not ManagerState.STARTED:
            raise ClientNotStartedError(details={"chain": self._network})
        return client

    async def _request(
        self,
        awaitable: Awaitable[T],
        timeout: float | None,
        error_type: type[ChainManagerError],
        message: str | None = None,
    ) -> T:
        """Await one RPC, mapping deadline expiry and transport failures."""
        request_timeout = timeout if timeout is not None else self._settings.request_timeout
        try:
            async with asyncio.timeout(request_timeout):
                return await awaitable
        except TimeoutError as e:
            raise RequestTimeoutError.wrap(e) from e
        except ChainManagerError:
            raise
        except Exception as e:
            raise error_type.wrap(e, message) from e

    def _address(self, value: Any) -> EvmAddress:
        if isinstance(value, str):
            return EvmAddress(value, self._network)
        return EvmAddress.from_bytes(as_bytes(value), self._network)

    # ============ Balance ============

    async def get_balance(
        self,
        address: Address,
        token: Token,
        timeout: float | None = None,
    ) -> int:
        """Get the balance of ``address`` in the token's smallest unit.

        Native balances come straight from the node; ERC-20 balances are read
        with a single ``balanceOf`` call against latest state.
        """
        client = self._require_client()

        if token.type is TokenType.NATIVE:
            return await self._request(
                client.balance_at(str(address)),
                timeout,
                BalanceQueryError,
            )
        if token.type is TokenType.ERC20:
            return await self._get_erc20_balance(client, address, token, timeout)

        raise UnsupportedTokenTypeError(
            f"unsupported token type: {token.type.name}",
            {"token_type": token.type.name, "chain": self._network},
        )

    async def _get_erc20_balance(
        self,
        client: NodeClient,
        address: Address,
        token: Token,
        timeout: float | None,
    ) -> int:
        try:
            fn_abi = filter_abi_by_name("balanceOf", ERC20_ABI)[0]
            call_data = function_abi_to_4byte_selector(fn_abi) + abi_encode(
                get_abi_input_types(fn_abi), [str(address)]
            )
        except Exception as e:
            raise ContractCallError.wrap(e, "failed to pack balanceOf call") from e

        output = await self._request(
            client.call_contract({"to": str(token.address), "data": Web3.to_hex(call_data)}),
            timeout,
            ContractCallError,
            "balanceOf call failed",
        )

        try:
            (balance,) = abi_decode(get_abi_output_types(fn_abi), output)
        except Exception as e:
            raise ContractCallError.wrap(e, "failed to unpack balanceOf result") from e
        return balance

    # ============ Read call ============

    async def read_call(self, tx: Transaction, timeout: float | None = None) -> bytes:
        """Execute ``eth_call`` for ``tx`` against latest state.

        Returns:
            Raw return data
        """
        client = self._require_client()
        if tx.to_address is None:
            raise InvalidTransactionError("invalid transaction: missing recipient address")

        message: dict[str, Any] = {"to": str(tx.to_address)}
        if tx.from_address is not None:
            message["from"] = str(tx.from_address)
        if tx.amount:
            message["value"] = tx.amount
        if tx.data:
            message["data"] = Web3.to_hex(tx.data)

        return await self._request(client.call_contract(message), timeout, ContractCallError)

    # ============ Submission ============

    async def send_transaction(self, tx: Transaction, timeout: float | None = None) -> str:
        """Sign ``tx`` with the injected signer and submit it.

        Node rejections are classified into ``TransactionSubmissionError``
        subclasses by their message text.

        Returns:
            0x-prefixed hash of the signed transaction
        """
        client = self._require_client()
        if self._signer is None:
            raise TransactionSigningError("failed to sign transaction: no signer configured")

        try:
            signed_tx = self._signer.sign_transaction(tx)
        except ChainManagerError:
            raise
        except Exception as e:
            raise TransactionSigningError.wrap(e) from e
        if signed_tx is None:
            raise InvalidTransactionError("invalid transaction: signer returned no transaction")

        signed = signed_tx.payload.get(SIGNED_TRANSACTION_KEY)
        if not isinstance(signed, SignedTransaction):
            raise InvalidTransactionError(
                f"invalid transaction: payload '{SIGNED_TRANSACTION_KEY}' is missing or malformed"
            )

        request_timeout = timeout if timeout is not None else self._settings.request_timeout
        try:
            async with asyncio.timeout(request_timeout):
                await client.send_raw_transaction(bytes(signed.raw_transaction))
        except TimeoutError as e:
            raise RequestTimeoutError.wrap(e) from e
        except Exception as e:
            error = classify_submission_error(e)
            logger.warning(f"Transaction rejected by {self._network} node ({error.kind.value}): {e}")
            raise error from e

        tx_hash = Web3.to_hex(signed.hash)
        signed_tx.hash = EvmTransactionHash(tx_hash, self._network)
        signed_tx.set_status(TransactionStatus.PENDING)
        logger.info(f"Submitted {self._network} transaction {tx_hash}")
        return tx_hash

    # ============ Transaction query ============

    async def get_transaction_details(
        self,
        tx_id: str,
        timeout: float | None = None,
    ) -> TransactionDetails:
        """Build a ``TransactionDetails`` from a transaction and its receipt.

        Raises:
            InvalidHashError: If ``tx_id`` is not a 32-byte hex hash
            TransactionRetrievalError: If the transaction or receipt lookup fails
            InvalidAddressError: If the sender cannot be recovered or an address is malformed
        """
        client = self._require_client()
        tx_hash = EvmTransactionHash(tx_id, self._network)
        hash_hex = str(tx_hash)

        try:
            tx, is_pending = await self._request(
                client.transaction_by_hash(hash_hex), timeout, TransactionRetrievalError
            )
            if tx is None:
                raise TransactionRetrievalError(f"failed to retrieve transaction: {hash_hex} not found")
            receipt = await self._request(
                client.transaction_receipt(hash_hex), timeout, TransactionRetrievalError
            )
            if receipt is None and not is_pending:
                raise TransactionRetrievalError(
                    f"failed to retrieve transaction: receipt for {hash_hex} not found"
                )
        except TransactionRetrievalError as e:
            logger.error(f"Failed to get transaction {hash_hex}: {e}")
            raise

        if is_pending:
            status = TransactionStatus.PENDING
        elif as_int(receipt.get("status")) == RECEIPT_STATUS_SUCCESSFUL:
            status = TransactionStatus.CONFIRMED
        else:
            status = TransactionStatus.FAILED

        try:
            from_address = self._address(recover_sender(tx))
        except InvalidAddressError:
            raise
        except Exception as e:
            raise InvalidAddressError.wrap(e, "failed to recover sender") from e

        to_address = self._address(tx["to"]) if tx.get("to") else None

        logs: list[Log] = []
        events: dict[str, Event] = {}
        fee: int | None = None
        block_number = tx.get("blockNumber")
        if receipt is not None and not is_pending:
            logs = self._decode_logs(receipt, hash_hex)
            events = self._derive_events(logs)
            fee = self._compute_fee(tx, receipt)
            block_number = receipt.get("blockNumber", block_number)

        return TransactionDetails(
            hash=tx_hash,
            status=status,
            from_address=from_address,
            to_address=to_address,
            amount=as_int(tx.get("value")),
            block_number=as_int(block_number) if block_number is not None else None,
            fee=fee,
            logs=logs,
            events=events,
        )

    def _decode_logs(self, receipt: Mapping[str, Any], tx_hash: str) -> list[Log]:
        logs = []
        for position, entry in enumerate(receipt.get("logs") or []):
            logs.append(
                Log(
                    address=self._address(entry["address"]),
                    topics=[Web3.to_hex(as_bytes(topic)) for topic in entry.get("topics") or []],
                    data=as_bytes(entry.get("data")),
                    block_number=as_int(entry.get("blockNumber")),
                    tx_hash=Web3.to_hex(as_bytes(entry["transactionHash"]))
                    if entry.get("transactionHash") is not None
                    else tx_hash,
                    index=as_int(entry.get("logIndex", position)),
                )
            )
        return logs

    @staticmethod
    def _derive_events(logs: list[Log]) -> dict[str, Event]:
        # First topic stands in for the event name; params need the contract ABI
        events: dict[str, Event] = {}
        for log in logs:
            if log.topics:
                events[log.topics[0]] = Event(name=log.topics[0], params={})
        return events

    @staticmethod
    def _compute_fee(tx: Mapping[str, Any], receipt: Mapping[str, Any]) -> int:
        gas_used = as_int(receipt.get("gasUsed"))
        effective_price = receipt.get("effectiveGasPrice")
        if transaction_type(tx) == DYNAMIC_FEE_TX_TYPE and effective_price is not None:
            return as_int(effective_price) * gas_used
        gas_price = tx.get("gasPrice", effective_price)
        return as_int(gas_price) * gas_used
