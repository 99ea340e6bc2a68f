"""Chain-agnostic domain types.

Identifiers, tokens, transactions and the details record returned by
``get_transaction_details``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from multichain.core.exceptions import InvalidTransactionError

# Payload key under which a signer stores the chain-native signed transaction.
SIGNED_TRANSACTION_KEY = "signedTransaction"


class Blockchain(str, Enum):
    """Supported blockchain networks."""

    ETHEREUM = "ethereum"
    BITCOIN = "bitcoin"
    SOLANA = "solana"
    ARBITRUM = "arbitrum"
    OPTIMISM = "optimism"
    AVALANCHE = "avalanche"
    POLYGON = "polygon"
    COSMOS = "cosmos"
    BSC = "bsc"
    BASE = "base"
    BLAST = "blast"

    @property
    def is_evm(self) -> bool:
        return self not in (Blockchain.BITCOIN, Blockchain.SOLANA, Blockchain.COSMOS)


class TokenType(IntEnum):
    """Token kinds a manager may be asked to query."""

    NATIVE = 0
    ERC20 = 1  # Fungible contract token
    SPL_TOKEN = 2
    COSMOS_DENOM = 3

    @property
    def requires_address(self) -> bool:
        return self is not TokenType.NATIVE


class TransactionType(IntEnum):
    TRANSFER = 0
    CONTRACT_CALL = 1
    STAKE = 2
    DELEGATE = 3


class TransactionStatus(str, Enum):
    """Transaction status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


# ============ Identifiers ============


class Address(ABC):
    """Validated, network-tagged account or contract address.

    Implementations validate on construction and are immutable afterwards.
    """

    @abstractmethod
    def __str__(self) -> str:
        """Return the canonical string form."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Return the raw address bytes."""

    @property
    @abstractmethod
    def network(self) -> str:
        """Return the network the address belongs to (e.g. ``ethereum``)."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Address):
            return NotImplemented
        return self.to_bytes() == other.to_bytes() and self.network == other.network

    def __hash__(self) -> int:
        return hash((self.to_bytes(), self.network))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, network={self.network!r})"


class TransactionHash(ABC):
    """Validated, network-tagged transaction hash."""

    @abstractmethod
    def __str__(self) -> str: ...

    @abstractmethod
    def to_bytes(self) -> bytes: ...

    @property
    @abstractmethod
    def network(self) -> str: ...

    @abstractmethod
    def validate(self) -> None:
        """Re-check the stored value, raising ``InvalidHashError`` if malformed."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TransactionHash):
            return NotImplemented
        return self.to_bytes() == other.to_bytes() and self.network == other.network

    def __hash__(self) -> int:
        return hash((self.to_bytes(), self.network))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r}, network={self.network!r})"


# ============ Tokens ============


@dataclass(frozen=True)
class Token:
    """A token on a blockchain network.

    Native tokens never carry an address; contract, mint and denom tokens
    always do.
    """

    type: TokenType
    address: Address | None = None
    name: str = ""
    symbol: str = ""
    decimals: int = 18

    def __post_init__(self) -> None:
        if self.type.requires_address and self.address is None:
            raise ValueError(f"{self.type.name} token requires an address")
        if not self.type.requires_address and self.address is not None:
            raise ValueError("native token must not carry an address")
        if self.decimals < 0:
            raise ValueError("decimals must be non-negative")


# ============ Fee fields ============


def _check_uint(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidTransactionError(f"invalid transaction: '{name}' must be a non-negative int")


def _check_data(value: bytes) -> None:
    if not isinstance(value, bytes):
        raise InvalidTransactionError("invalid transaction: 'data' must be bytes")


@dataclass(frozen=True)
class LegacyFields:
    """Fixed gas-price fee fields (type 0 transactions)."""

    nonce: int
    gas_price: int
    gas_limit: int
    chain_id: int
    data: bytes = b""

    def __post_init__(self) -> None:
        for name in ("nonce", "gas_price", "gas_limit", "chain_id"):
            _check_uint(name, getattr(self, name))
        _check_data(self.data)

    def to_tx_dict(self) -> dict[str, Any]:
        return {
            "nonce": self.nonce,
            "gasPrice": self.gas_price,
            "gas": self.gas_limit,
            "chainId": self.chain_id,
            "data": self.data,
        }


@dataclass(frozen=True)
class DynamicFeeFields:
    """Base fee plus priority fee fields (EIP-1559, type 2 transactions)."""

    nonce: int
    max_fee_per_gas: int
    max_priority_fee_per_gas: int
    gas_limit: int
    chain_id: int
    data: bytes = b""

    def __post_init__(self) -> None:
        for name in ("nonce", "max_fee_per_gas", "max_priority_fee_per_gas", "gas_limit", "chain_id"):
            _check_uint(name, getattr(self, name))
        _check_data(self.data)
        if self.max_priority_fee_per_gas > self.max_fee_per_gas:
            raise InvalidTransactionError(
                "invalid transaction: max priority fee exceeds max fee per gas"
            )

    def to_tx_dict(self) -> dict[str, Any]:
        return {
            "type": 2,
            "nonce": self.nonce,
            "maxFeePerGas": self.max_fee_per_gas,
            "maxPriorityFeePerGas": self.max_priority_fee_per_gas,
            "gas": self.gas_limit,
            "chainId": self.chain_id,
            "data": self.data,
        }


FeeFields = LegacyFields | DynamicFeeFields


# ============ Transactions ============


@dataclass
class Transaction:
    """Transfer intent plus chain-specific fields.

    ``fields`` holds the typed fee variant used for signing; ``payload`` holds
    any other chain-specific values, including the signed transaction object
    once a signer has run.
    """

    from_address: Address | None = None
    to_address: Address | None = None
    amount: int = 0
    type: TransactionType = TransactionType.TRANSFER
    status: TransactionStatus | None = None
    hash: TransactionHash | None = None
    timestamp: datetime | None = None
    block_number: int | None = None
    fields: FeeFields | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    signed_tx: bytes | None = None

    def validate(self) -> None:
        """Check the transaction is complete enough to sign."""
        if self.from_address is None or not str(self.from_address):
            raise InvalidTransactionError("invalid transaction: missing sender address")
        if self.to_address is None or not str(self.to_address):
            raise InvalidTransactionError("invalid transaction: missing recipient address")
        if isinstance(self.amount, bool) or not isinstance(self.amount, int) or self.amount < 0:
            raise InvalidTransactionError("invalid transaction: invalid transaction amount")
        # Only contract calls may move zero value
        if self.amount == 0 and self.type is not TransactionType.CONTRACT_CALL:
            raise InvalidTransactionError("invalid transaction: invalid transaction amount")
        if self.fields is None:
            raise InvalidTransactionError("invalid transaction: missing fee fields")
        if "data" in self.payload and not isinstance(self.payload["data"], bytes):
            raise InvalidTransactionError("invalid transaction: payload 'data' must be bytes")

    @property
    def data(self) -> bytes:
        """Call data from the fee fields, falling back to ``payload['data']``."""
        if self.fields is not None and self.fields.data:
            return self.fields.data
        return self.payload.get("data", b"")

    def set_status(self, status: TransactionStatus) -> None:
        self.status = status

    def set_block_number(self, block_number: int) -> None:
        self.block_number = block_number

    def set_signed_tx(self, signed_tx: bytes) -> None:
        self.signed_tx = signed_tx

    def set_payload(self, key: str, value: Any) -> None:
        self.payload[key] = value


# ============ Transaction details ============


@dataclass(frozen=True)
class Log:
    """A log entry emitted while executing a transaction."""

    address: Address
    topics: list[str]
    data: bytes
    block_number: int
    tx_hash: str
    index: int


@dataclass(frozen=True)
class Event:
    """Coarse event derived from a log's first topic; params are not decoded."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TransactionDetails:
    """Chain-agnostic view of a transaction and its execution result."""

    hash: TransactionHash
    status: TransactionStatus
    from_address: Address
    to_address: Address | None
    amount: int
    block_number: int | None = None
    fee: int | None = None
    logs: list[Log] = field(default_factory=list)
    events: dict[str, Event] = field(default_factory=dict)
