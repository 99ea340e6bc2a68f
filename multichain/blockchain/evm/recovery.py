"""Sender recovery for JSON-RPC shaped EVM transactions.

The signing hash depends on the transaction type and, for legacy
transactions, on whether ``v`` encodes a chain id (EIP-155).
"""

from collections.abc import Mapping
from typing import Any

import rlp
from eth_account.typed_transactions import TypedTransaction
from eth_keys import keys
from eth_utils import keccak, to_checksum_address, to_int

LEGACY_TX_TYPE = 0
ACCESS_LIST_TX_TYPE = 1
DYNAMIC_FEE_TX_TYPE = 2


def as_int(value: Any) -> int:
    """Coerce an RPC quantity (int, 0x-string or bytes) to int."""
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return to_int(hexstr=value)
    return int.from_bytes(bytes(value), "big")


def as_bytes(value: Any) -> bytes:
    """Coerce RPC data (bytes or 0x-string) to bytes."""
    if value is None:
        return b""
    if isinstance(value, str):
        body = value[2:] if value.startswith(("0x", "0X")) else value
        return bytes.fromhex(body)
    return bytes(value)


def transaction_type(tx: Mapping[str, Any]) -> int:
    return as_int(tx.get("type", LEGACY_TX_TYPE))


def _to_field(tx: Mapping[str, Any]) -> bytes:
    return as_bytes(tx.get("to"))


def _data_field(tx: Mapping[str, Any]) -> bytes:
    return as_bytes(tx.get("input", tx.get("data")))


def _legacy_signing_hash(tx: Mapping[str, Any]) -> tuple[bytes, int]:
    v = as_int(tx["v"])
    fields = [
        as_int(tx["nonce"]),
        as_int(tx["gasPrice"]),
        as_int(tx["gas"]),
        _to_field(tx),
        as_int(tx["value"]),
        _data_field(tx),
    ]
    if v in (27, 28):
        # Homestead signature without replay protection
        return keccak(rlp.encode(fields)), v - 27

    # EIP-155: v = chain_id * 2 + 35 + recovery_id
    chain_id = (v - 35) // 2
    fields.extend([chain_id, 0, 0])
    return keccak(rlp.encode(fields)), v - 35 - 2 * chain_id


def _access_list(tx: Mapping[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "address": to_checksum_address(entry["address"]),
            "storageKeys": ["0x" + as_bytes(key).hex() for key in entry["storageKeys"]],
        }
        for entry in tx.get("accessList") or []
    ]


def _typed_signing_hash(tx: Mapping[str, Any], tx_type: int) -> tuple[bytes, int]:
    unsigned: dict[str, Any] = {
        "type": tx_type,
        "chainId": as_int(tx["chainId"]),
        "nonce": as_int(tx["nonce"]),
        "gas": as_int(tx["gas"]),
        "value": as_int(tx["value"]),
        "data": _data_field(tx),
        "accessList": _access_list(tx),
    }
    if tx.get("to"):
        unsigned["to"] = to_checksum_address(tx["to"])
    if tx_type == DYNAMIC_FEE_TX_TYPE:
        unsigned["maxFeePerGas"] = as_int(tx["maxFeePerGas"])
        unsigned["maxPriorityFeePerGas"] = as_int(tx["maxPriorityFeePerGas"])
    else:
        unsigned["gasPrice"] = as_int(tx["gasPrice"])

    # Typed transactions carry the recovery id directly (yParity)
    recovery_id = as_int(tx.get("yParity", tx["v"]))
    return TypedTransaction.from_dict(unsigned).hash(), recovery_id


def recover_sender(tx: Mapping[str, Any]) -> str:
    """Recover the checksum address that signed ``tx``.

    Raises:
        ValueError: If the transaction type is unsupported or the signature is invalid
        KeyError: If a required field is missing
    """
    tx_type = transaction_type(tx)
    if tx_type == LEGACY_TX_TYPE:
        msg_hash, recovery_id = _legacy_signing_hash(tx)
    elif tx_type in (ACCESS_LIST_TX_TYPE, DYNAMIC_FEE_TX_TYPE):
        msg_hash, recovery_id = _typed_signing_hash(tx, tx_type)
    else:
        raise ValueError(f"unsupported transaction type for sender recovery: {tx_type}")

    signature = keys.Signature(vrs=(recovery_id, as_int(tx["r"]), as_int(tx["s"])))
    return signature.recover_public_key_from_msg_hash(msg_hash).to_checksum_address()
