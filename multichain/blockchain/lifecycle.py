"""Lifecycle-only manager shared by chains without a backend yet."""

import asyncio
import logging

from multichain.blockchain.base import LifecycleCapability, ManagerState
from multichain.blockchain.types import Blockchain
from multichain.core.exceptions import AlreadyStartedError, ClientNotStartedError

logger = logging.getLogger(__name__)


class LifecycleOnlyManager(LifecycleCapability):
    """Tracks start/stop for an endpoint without opening a connection.

    Balance, read-call, submission and detail capabilities are absent, so
    ``require_capability`` reports them as not implemented.
    """

    CHAIN: Blockchain

    def __init__(self, url: str) -> None:
        self._url = url
        self._state = ManagerState.UNSTARTED
        self._lock = asyncio.Lock()

    @property
    def chain_code(self) -> str:
        return self.CHAIN.value

    @property
    def state(self) -> ManagerState:
        return self._state

    @property
    def url(self) -> str:
        return self._url

    async def start(self, timeout: float | None = None) -> None:
        async with self._lock:
            if self._state is ManagerState.STARTED:
                raise AlreadyStartedError(details={"chain": self.chain_code})
            self._state = ManagerState.STARTED
        logger.info(f"{self.chain_code} manager started ({self._url})")

    async def stop(self) -> None:
        async with self._lock:
            if self._state is not ManagerState.STARTED:
                raise ClientNotStartedError(details={"chain": self.chain_code})
            self._state = ManagerState.STOPPED
        logger.info(f"{self.chain_code} manager stopped")
