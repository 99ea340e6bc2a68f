"""Base blockchain manager interface.

Defines the capability interfaces chain managers implement. A manager only
inherits the capabilities its chain actually supports; ``BlockchainManager``
is the full contract.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, TypeVar

from multichain.blockchain.types import Address, Token, Transaction, TransactionDetails
from multichain.core.exceptions import ChainNotImplementedError


class ManagerState(str, Enum):
    """Manager lifecycle state."""

    UNSTARTED = "unstarted"
    STARTED = "started"
    STOPPED = "stopped"


class TransactionSigner(ABC):
    """Signs transactions without exposing key material to the manager."""

    @abstractmethod
    def sign_transaction(self, tx: Transaction) -> Transaction | None:
        """Sign ``tx``.

        Returns:
            The transaction with its signed payload and raw bytes populated

        Raises:
            InvalidTransactionError: If the transaction cannot be signed as given
            TransactionSigningError: If signing itself fails
        """
        pass


class LifecycleCapability(ABC):
    """Connect to and disconnect from a node."""

    @property
    @abstractmethod
    def chain_code(self) -> str:
        """Return the chain code (e.g., 'ethereum', 'bitcoin')."""
        pass

    @property
    @abstractmethod
    def state(self) -> ManagerState:
        pass

    @abstractmethod
    async def start(self, timeout: float | None = None) -> None:
        """Connect to the configured node.

        Raises:
            AlreadyStartedError: If the manager is already started
            NodeConnectionError: If the node cannot be reached
        """
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Release the node connection.

        Raises:
            ClientNotStartedError: If the manager is not started
        """
        pass


class BalanceCapability(ABC):
    @abstractmethod
    async def get_balance(
        self,
        address: Address,
        token: Token,
        timeout: float | None = None,
    ) -> int:
        """Get the balance of ``address`` for ``token`` in the token's smallest unit.

        Raises:
            UnsupportedTokenTypeError: If the chain cannot query this token type
        """
        pass


class ReadCallCapability(ABC):
    @abstractmethod
    async def read_call(self, tx: Transaction, timeout: float | None = None) -> Any:
        """Execute a read-only call described by ``tx`` against latest state."""
        pass


class SubmitCapability(ABC):
    @abstractmethod
    async def send_transaction(self, tx: Transaction, timeout: float | None = None) -> str:
        """Sign and submit ``tx``.

        Returns:
            Hash of the submitted transaction
        """
        pass


class DetailsCapability(ABC):
    @abstractmethod
    async def get_transaction_details(
        self,
        tx_id: str,
        timeout: float | None = None,
    ) -> TransactionDetails:
        """Get details of a transaction by its hash."""
        pass


class BlockchainManager(
    LifecycleCapability,
    BalanceCapability,
    ReadCallCapability,
    SubmitCapability,
    DetailsCapability,
):
    """Full blockchain manager contract.

    Usage:
        manager = get_blockchain_manager("ethereum", signer=signer)
        await manager.start()
        balance = await manager.get_balance(address, token)
        await manager.stop()
    """


CapabilityT = TypeVar("CapabilityT")


def supports(manager: LifecycleCapability, capability: type) -> bool:
    """Return True if ``manager`` implements ``capability``."""
    return isinstance(manager, capability)


def require_capability(manager: LifecycleCapability, capability: type[CapabilityT]) -> CapabilityT:
    """Return ``manager`` typed as ``capability``.

    Raises:
        ChainNotImplementedError: If the manager lacks the capability
    """
    if not isinstance(manager, capability):
        raise ChainNotImplementedError(
            f"not implemented: {manager.chain_code} manager does not support "
            f"{capability.__name__}",
            {"chain": manager.chain_code, "capability": capability.__name__},
        )
    return manager
