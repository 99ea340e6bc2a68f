"""EVM address and transaction hash value types."""

from eth_utils import to_checksum_address

from multichain.blockchain.types import Address, Blockchain, TransactionHash
from multichain.core.exceptions import InvalidAddressError, InvalidHashError

ADDRESS_LENGTH = 20
HASH_LENGTH = 32

_HEX_CHARACTERS = frozenset("0123456789abcdefABCDEF")


def has_0x_prefix(value: str) -> bool:
    """Check whether ``value`` begins with '0x' or '0X'."""
    return len(value) >= 2 and value[0] == "0" and value[1] in "xX"


def strip_0x(value: str) -> str:
    return value[2:] if has_0x_prefix(value) else value


def is_hex(value: str) -> bool:
    """Check that ``value`` is an even-length string of hex characters."""
    return len(value) % 2 == 0 and all(c in _HEX_CHARACTERS for c in value)


def is_hex_of_length(value: str, byte_length: int) -> bool:
    """Check that ``value`` encodes exactly ``byte_length`` bytes of hex."""
    if not isinstance(value, str):
        return False
    body = strip_0x(value)
    return len(body) == 2 * byte_length and is_hex(body)


def _network_name(network: Blockchain | str) -> str:
    return network.value if isinstance(network, Blockchain) else str(network)


class EvmAddress(Address):
    """20-byte EVM address. ``str()`` returns the EIP-55 checksum form."""

    __slots__ = ("_raw", "_network")

    def __init__(self, value: str, network: Blockchain | str = Blockchain.ETHEREUM) -> None:
        if not is_hex_of_length(value, ADDRESS_LENGTH):
            raise InvalidAddressError(f"invalid EVM address: {value!r}", {"address": value})
        self._raw = bytes.fromhex(strip_0x(value))
        self._network = _network_name(network)

    @classmethod
    def from_bytes(cls, raw: bytes, network: Blockchain | str = Blockchain.ETHEREUM) -> "EvmAddress":
        return cls("0x" + bytes(raw).hex(), network)

    def __str__(self) -> str:
        return to_checksum_address(self._raw)

    def to_bytes(self) -> bytes:
        return self._raw

    @property
    def network(self) -> str:
        return self._network


class EvmTransactionHash(TransactionHash):
    """32-byte EVM transaction hash. ``str()`` returns lower-case 0x-prefixed hex."""

    __slots__ = ("_raw", "_network")

    def __init__(self, value: str, network: Blockchain | str = Blockchain.ETHEREUM) -> None:
        if not is_hex_of_length(value, HASH_LENGTH):
            raise InvalidHashError(f"invalid EVM transaction hash: {value!r}", {"hash": value})
        self._raw = bytes.fromhex(strip_0x(value))
        self._network = _network_name(network)

    @classmethod
    def from_bytes(
        cls, raw: bytes, network: Blockchain | str = Blockchain.ETHEREUM
    ) -> "EvmTransactionHash":
        return cls("0x" + bytes(raw).hex(), network)

    def __str__(self) -> str:
        return "0x" + self._raw.hex()

    def to_bytes(self) -> bytes:
        return self._raw

    @property
    def network(self) -> str:
        return self._network

    def validate(self) -> None:
        if not is_hex_of_length(str(self), HASH_LENGTH):
            raise InvalidHashError(f"invalid EVM transaction hash: {str(self)!r}")
