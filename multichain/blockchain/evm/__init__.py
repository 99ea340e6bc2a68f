"""EVM-compatible chain support."""

from multichain.blockchain.evm.address import EvmAddress, EvmTransactionHash
from multichain.blockchain.evm.client import (
    NodeClient,
    NodeClientFactory,
    Web3ClientFactory,
    Web3NodeClient,
)
from multichain.blockchain.evm.manager import ERC20_ABI, EvmManager
from multichain.blockchain.evm.signer import PrivateKeySigner
from multichain.blockchain.evm.transaction import new_transaction

__all__ = [
    "EvmAddress",
    "EvmTransactionHash",
    "EvmManager",
    "ERC20_ABI",
    "NodeClient",
    "NodeClientFactory",
    "PrivateKeySigner",
    "Web3ClientFactory",
    "Web3NodeClient",
    "new_transaction",
]
