"""Solana blockchain manager.

Lifecycle only for now. Balance, account reads, submission and transaction
details need a Solana RPC client and are reported as not implemented.
"""

from multichain.blockchain.lifecycle import LifecycleOnlyManager
from multichain.blockchain.types import Blockchain


class SolanaManager(LifecycleOnlyManager):
    """Solana manager (native SOL and SPL tokens once a backend exists)."""

    CHAIN = Blockchain.SOLANA
