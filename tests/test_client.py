"""
Unit tests for the web3-backed node client factory.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from multichain.blockchain.evm import client as client_module
from multichain.blockchain.evm.client import Web3ClientFactory
from multichain.blockchain.evm.manager import EvmManager
from multichain.core.exceptions import ConnectionTimeoutError, NodeConnectionError

from tests.conftest import NODE_URL


class _FakeWeb3:
    """Stands in for AsyncWeb3; ``chain_id`` behavior is set per test."""

    AsyncHTTPProvider = MagicMock()
    instances: list["_FakeWeb3"] = []
    chain_id_behavior = None

    def __init__(self, provider):
        self.provider = MagicMock()
        self.provider.disconnect = AsyncMock()
        self.eth = self
        _FakeWeb3.instances.append(self)

    @property
    def chain_id(self):
        return _FakeWeb3.chain_id_behavior()


@pytest.fixture
def fake_web3(monkeypatch):
    _FakeWeb3.instances = []
    monkeypatch.setattr(client_module, "AsyncWeb3", _FakeWeb3)
    return _FakeWeb3


class TestWeb3ClientFactory:
    """Test Web3ClientFactory.dial."""

    @pytest.mark.asyncio
    async def test_dial_success(self, fake_web3):
        async def chain_id():
            return 1

        fake_web3.chain_id_behavior = chain_id

        client = await Web3ClientFactory().dial(NODE_URL)

        assert client.w3 is fake_web3.instances[0]
        fake_web3.instances[0].provider.disconnect.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_scheme(self, fake_web3):
        with pytest.raises(ValueError):
            await Web3ClientFactory().dial("ws://localhost:8546")

        assert fake_web3.instances == []

    @pytest.mark.asyncio
    async def test_dial_error_closes_provider(self, fake_web3, settings):
        async def chain_id():
            raise OSError("connection refused")

        fake_web3.chain_id_behavior = chain_id

        with pytest.raises(NodeConnectionError):
            await EvmManager(NODE_URL, settings=settings).start()

        fake_web3.instances[0].provider.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_dial_timeout_closes_provider(self, fake_web3, settings):
        """A dial cut short by the start deadline still disconnects the provider."""

        async def chain_id():
            await asyncio.sleep(10)

        fake_web3.chain_id_behavior = chain_id

        with pytest.raises(ConnectionTimeoutError):
            await EvmManager(NODE_URL, settings=settings).start(timeout=0.05)

        fake_web3.instances[0].provider.disconnect.assert_awaited_once()
