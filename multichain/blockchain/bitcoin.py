"""Bitcoin blockchain manager.

Bitcoin Core's JSON-RPC has no per-address balance query and no contract
calls, so only the lifecycle is provided here.
"""

from multichain.blockchain.lifecycle import LifecycleOnlyManager
from multichain.blockchain.types import Blockchain


class BitcoinManager(LifecycleOnlyManager):
    CHAIN = Blockchain.BITCOIN
