"""Blockchain manager module.

Provides a chain-agnostic manager interface over EVM chains, Bitcoin,
Cosmos and Solana.
"""

from multichain.blockchain.base import (
    BalanceCapability,
    BlockchainManager,
    DetailsCapability,
    LifecycleCapability,
    ManagerState,
    ReadCallCapability,
    SubmitCapability,
    TransactionSigner,
    require_capability,
    supports,
)
from multichain.blockchain.factory import (
    get_blockchain_manager,
    get_supported_chains,
    normalize_chain,
)
from multichain.blockchain.types import (
    SIGNED_TRANSACTION_KEY,
    Address,
    Blockchain,
    DynamicFeeFields,
    Event,
    LegacyFields,
    Log,
    Token,
    TokenType,
    Transaction,
    TransactionDetails,
    TransactionHash,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    # Interfaces
    "BlockchainManager",
    "LifecycleCapability",
    "BalanceCapability",
    "ReadCallCapability",
    "SubmitCapability",
    "DetailsCapability",
    "ManagerState",
    "TransactionSigner",
    "require_capability",
    "supports",
    # Types
    "Address",
    "Blockchain",
    "DynamicFeeFields",
    "Event",
    "LegacyFields",
    "Log",
    "SIGNED_TRANSACTION_KEY",
    "Token",
    "TokenType",
    "Transaction",
    "TransactionDetails",
    "TransactionHash",
    "TransactionStatus",
    "TransactionType",
    # Factory
    "get_blockchain_manager",
    "get_supported_chains",
    "normalize_chain",
]
