"""Blockchain manager factory.

Provides factory method to get the appropriate blockchain manager
based on chain code.
"""

import logging

from multichain.blockchain.base import LifecycleCapability, TransactionSigner
from multichain.blockchain.evm.client import NodeClientFactory
from multichain.blockchain.types import Blockchain
from multichain.core.config import Settings, get_settings
from multichain.core.exceptions import UnsupportedChainError

logger = logging.getLogger(__name__)

# Chain code mapping (aliases are matched case-insensitively)
CHAIN_CODES = {
    "ethereum": Blockchain.ETHEREUM,
    "eth": Blockchain.ETHEREUM,
    "polygon": Blockchain.POLYGON,
    "matic": Blockchain.POLYGON,
    "arbitrum": Blockchain.ARBITRUM,
    "arb": Blockchain.ARBITRUM,
    "optimism": Blockchain.OPTIMISM,
    "op": Blockchain.OPTIMISM,
    "avalanche": Blockchain.AVALANCHE,
    "avax": Blockchain.AVALANCHE,
    "bsc": Blockchain.BSC,
    "bnb": Blockchain.BSC,
    "base": Blockchain.BASE,
    "blast": Blockchain.BLAST,
    "bitcoin": Blockchain.BITCOIN,
    "btc": Blockchain.BITCOIN,
    "cosmos": Blockchain.COSMOS,
    "atom": Blockchain.COSMOS,
    "solana": Blockchain.SOLANA,
    "sol": Blockchain.SOLANA,
}


def normalize_chain(chain_code: Blockchain | str) -> Blockchain:
    """Resolve a chain code or alias to a ``Blockchain``.

    Raises:
        UnsupportedChainError: If the code is unknown
    """
    if isinstance(chain_code, Blockchain):
        return chain_code
    normalized = CHAIN_CODES.get(chain_code.strip().lower())
    if normalized is None:
        raise UnsupportedChainError(f"unsupported chain: {chain_code}", {"chain": chain_code})
    return normalized


def get_blockchain_manager(
    chain_code: Blockchain | str,
    url: str | None = None,
    signer: TransactionSigner | None = None,
    client_factory: NodeClientFactory | None = None,
    settings: Settings | None = None,
) -> LifecycleCapability:
    """Get a blockchain manager for the specified chain.

    Args:
        chain_code: Chain code or alias (e.g., 'ethereum', 'ETH', 'polygon', 'sol')
        url: Node endpoint; defaults to the chain's configured endpoint
        signer: Transaction signer for chains that submit transactions
        client_factory: Node client factory for EVM chains (web3.py by default)
        settings: Settings to use instead of the cached environment settings

    Returns:
        A manager instance. EVM chains return a full ``BlockchainManager``;
        other chains return lifecycle-only managers.

    Raises:
        UnsupportedChainError: If chain code is not supported
    """
    chain = normalize_chain(chain_code)
    settings = settings or get_settings()
    endpoint = url or settings.rpc_url_for(chain.value)
    if not endpoint:
        logger.warning(f"No endpoint configured for {chain.value}")

    if chain.is_evm:
        from multichain.blockchain.evm.manager import EvmManager

        return EvmManager(
            endpoint,
            signer=signer,
            client_factory=client_factory,
            network=chain,
            settings=settings,
        )
    elif chain is Blockchain.BITCOIN:
        from multichain.blockchain.bitcoin import BitcoinManager

        return BitcoinManager(endpoint)
    elif chain is Blockchain.COSMOS:
        from multichain.blockchain.cosmos import CosmosManager

        return CosmosManager(endpoint)
    elif chain is Blockchain.SOLANA:
        from multichain.blockchain.solana import SolanaManager

        return SolanaManager(endpoint)
    else:
        raise UnsupportedChainError(f"unsupported chain: {chain_code}", {"chain": chain.value})


def get_supported_chains() -> list[str]:
    """Get list of supported chain codes.

    Returns:
        List of chain codes
    """
    return [chain.value for chain in Blockchain]
