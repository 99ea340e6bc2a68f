"""
Shared fixtures for multichain tests. Node access is replaced by AsyncMock
clients so no network is needed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from eth_account import Account

from multichain.blockchain.evm.address import EvmAddress
from multichain.blockchain.evm.manager import EvmManager
from multichain.blockchain.evm.signer import PrivateKeySigner
from multichain.core.config import Settings

RECIPIENT = "0x32Be343B94f860124dC4fEe278FDCBD38C102D88"
TOKEN_CONTRACT = "0xdAC17F958D2ee523a2206206994597C13D831ec7"
NODE_URL = "http://localhost:8545"


@pytest.fixture
def settings():
    """Settings with short timeouts, independent of the environment."""
    return Settings(dial_timeout=1.0, request_timeout=1.0, _env_file=None)


@pytest.fixture
def account():
    return Account.create()


@pytest.fixture
def signer(account):
    return PrivateKeySigner(account.key.hex())


@pytest.fixture
def sender(account):
    return EvmAddress(account.address)


@pytest.fixture
def recipient():
    return EvmAddress(RECIPIENT)


@pytest.fixture
def node_client():
    """Node client whose RPC methods are AsyncMocks."""
    client = AsyncMock()
    client.transaction_receipt.return_value = None
    return client


@pytest.fixture
def client_factory(node_client):
    factory = MagicMock()
    factory.dial = AsyncMock(return_value=node_client)
    return factory


@pytest.fixture
def manager(client_factory, signer, settings):
    """Unstarted EVM manager wired to the mock client factory."""
    return EvmManager(NODE_URL, signer=signer, client_factory=client_factory, settings=settings)


@pytest_asyncio.fixture
async def started_manager(manager):
    await manager.start()
    return manager
