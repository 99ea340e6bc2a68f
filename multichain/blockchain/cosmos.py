"""Cosmos blockchain manager.

Only the lifecycle is available; the Cosmos SDK gRPC backend is not implemented.
"""

from multichain.blockchain.lifecycle import LifecycleOnlyManager
from multichain.blockchain.types import Blockchain


class CosmosManager(LifecycleOnlyManager):
    """Cosmos manager without balance, call, submission or detail support."""

    CHAIN = Blockchain.COSMOS
