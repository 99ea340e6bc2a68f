"""Core module - configuration, logging, and exceptions."""

from multichain.core.config import Settings, get_settings
from multichain.core.exceptions import (
    AlreadyStartedError,
    BalanceQueryError,
    ChainManagerError,
    ChainNotImplementedError,
    ClientNotStartedError,
    ConnectionCanceledError,
    ConnectionTimeoutError,
    ContractCallError,
    ErrorKind,
    InsufficientFundsError,
    InvalidAddressError,
    InvalidHashError,
    InvalidPrivateKeyError,
    InvalidTransactionError,
    MaxGasCapExceededError,
    NodeConnectionError,
    NonceTooLowError,
    ReplacementUnderpricedError,
    RequestTimeoutError,
    TransactionRetrievalError,
    TransactionSigningError,
    TransactionSubmissionError,
    UnsupportedChainError,
    UnsupportedTokenTypeError,
)
from multichain.core.log import configure_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "configure_logging",
    # Exceptions
    "ErrorKind",
    "ChainManagerError",
    "AlreadyStartedError",
    "ClientNotStartedError",
    "NodeConnectionError",
    "ConnectionCanceledError",
    "ConnectionTimeoutError",
    "RequestTimeoutError",
    "UnsupportedChainError",
    "UnsupportedTokenTypeError",
    "ChainNotImplementedError",
    "ContractCallError",
    "BalanceQueryError",
    "InvalidAddressError",
    "InvalidHashError",
    "InvalidTransactionError",
    "InvalidPrivateKeyError",
    "TransactionSigningError",
    "TransactionSubmissionError",
    "InsufficientFundsError",
    "MaxGasCapExceededError",
    "ReplacementUnderpricedError",
    "NonceTooLowError",
    "TransactionRetrievalError",
]
