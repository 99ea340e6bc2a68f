"""EVM transaction construction."""

from datetime import datetime

from multichain.blockchain.types import (
    Address,
    DynamicFeeFields,
    LegacyFields,
    Transaction,
    TransactionHash,
    TransactionStatus,
    TransactionType,
)


def new_transaction(
    from_address: Address,
    to_address: Address,
    amount: int,
    *,
    nonce: int,
    gas_limit: int,
    chain_id: int,
    gas_price: int | None = None,
    max_fee_per_gas: int | None = None,
    max_priority_fee_per_gas: int | None = None,
    data: bytes = b"",
    tx_type: TransactionType = TransactionType.TRANSFER,
    tx_hash: TransactionHash | None = None,
    status: TransactionStatus | None = None,
    timestamp: datetime | None = None,
    block_number: int | None = None,
) -> Transaction:
    """Create an EVM transaction with typed fee fields.

    Pass ``gas_price`` for a legacy transaction, or ``max_fee_per_gas`` and
    ``max_priority_fee_per_gas`` for an EIP-1559 one.

    Raises:
        ValueError: If neither or both fee models are given
        InvalidTransactionError: If a fee field is malformed
    """
    dynamic = max_fee_per_gas is not None or max_priority_fee_per_gas is not None
    if gas_price is not None and dynamic:
        raise ValueError("gas_price cannot be combined with dynamic fee fields")

    fields: LegacyFields | DynamicFeeFields
    if gas_price is not None:
        fields = LegacyFields(
            nonce=nonce,
            gas_price=gas_price,
            gas_limit=gas_limit,
            chain_id=chain_id,
            data=data,
        )
    elif max_fee_per_gas is not None and max_priority_fee_per_gas is not None:
        fields = DynamicFeeFields(
            nonce=nonce,
            max_fee_per_gas=max_fee_per_gas,
            max_priority_fee_per_gas=max_priority_fee_per_gas,
            gas_limit=gas_limit,
            chain_id=chain_id,
            data=data,
        )
    else:
        raise ValueError("either gas_price or both dynamic fee fields are required")

    return Transaction(
        from_address=from_address,
        to_address=to_address,
        amount=amount,
        type=tx_type,
        status=status,
        hash=tx_hash,
        timestamp=timestamp,
        block_number=block_number,
        fields=fields,
    )
