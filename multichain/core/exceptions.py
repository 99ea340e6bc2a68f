"""Multichain - Custom exceptions.

Every error raised by a manager is a ``ChainManagerError`` carrying an
``ErrorKind``. Errors raised because of another exception always chain it
(``__cause__``) and append its text to the message.
"""

from enum import Enum
from typing import Any, Self


class ErrorKind(str, Enum):
    """Domain error kinds reported by blockchain managers."""

    ALREADY_STARTED = "already started"
    CLIENT_NOT_STARTED = "client not started"
    CONNECTION_FAILED = "unable to connect"
    CONNECTION_CANCELED = "connection canceled"
    CONNECTION_TIMEOUT = "connection timed out"
    REQUEST_TIMEOUT = "request timed out"
    UNSUPPORTED_CHAIN = "unsupported chain"
    UNSUPPORTED_TOKEN_TYPE = "unsupported token type"
    CONTRACT_CALL_FAILED = "contract call failed"
    FAILED_TO_GET_BALANCE = "failed to get balance"
    INVALID_TRANSACTION = "invalid transaction"
    INVALID_PRIVATE_KEY = "invalid private key"
    FAILED_TO_SIGN_TRANSACTION = "failed to sign transaction"
    INSUFFICIENT_FUNDS = "insufficient funds"
    MAX_GAS_CAP_EXCEEDED = "max gas cap exceeded"
    REPLACEMENT_UNDERPRICED = "replacement transaction underpriced"
    NONCE_TOO_LOW = "nonce too low"
    FAILED_TO_SEND_TRANSACTION = "failed to send transaction"
    FAILED_TO_RETRIEVE_TRANSACTION = "failed to retrieve transaction"
    INVALID_ADDRESS = "invalid address"
    INVALID_HASH = "invalid hash"
    NOT_IMPLEMENTED = "not implemented"


class ChainManagerError(Exception):
    """Base exception for all multichain errors."""

    kind: ErrorKind = ErrorKind.NOT_IMPLEMENTED

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.kind.value
        self.details = details or {}
        super().__init__(self.message)

    @classmethod
    def wrap(cls, cause: BaseException, message: str | None = None, **details: Any) -> Self:
        """Build an error of this kind around ``cause``.

        The caller still has to ``raise ... from cause`` so the chain is kept.
        """
        prefix = message or cls.kind.value
        text = str(cause) or type(cause).__name__
        return cls(f"{prefix}: {text}", details)


# ============ Lifecycle ============


class AlreadyStartedError(ChainManagerError):
    """Start called on a manager that is already started."""

    kind = ErrorKind.ALREADY_STARTED


class ClientNotStartedError(ChainManagerError):
    """Operation issued before start or after stop."""

    kind = ErrorKind.CLIENT_NOT_STARTED


class NodeConnectionError(ChainManagerError):
    """Unable to connect to the node."""

    kind = ErrorKind.CONNECTION_FAILED


class ConnectionCanceledError(NodeConnectionError):
    """Connecting was canceled by the caller."""

    kind = ErrorKind.CONNECTION_CANCELED


class ConnectionTimeoutError(NodeConnectionError):
    """Connecting did not finish before the deadline."""

    kind = ErrorKind.CONNECTION_TIMEOUT


class RequestTimeoutError(ChainManagerError):
    """An RPC request did not finish before the deadline."""

    kind = ErrorKind.REQUEST_TIMEOUT


# ============ Capabilities ============


class UnsupportedChainError(ChainManagerError, ValueError):
    """No manager exists for the requested chain."""

    kind = ErrorKind.UNSUPPORTED_CHAIN


class UnsupportedTokenTypeError(ChainManagerError):
    """The manager cannot query balances for this token type."""

    kind = ErrorKind.UNSUPPORTED_TOKEN_TYPE


class ChainNotImplementedError(ChainManagerError, NotImplementedError):
    """The chain manager does not provide this capability."""

    kind = ErrorKind.NOT_IMPLEMENTED


class ContractCallError(ChainManagerError):
    """Read-only contract call, ABI encoding or decoding failed."""

    kind = ErrorKind.CONTRACT_CALL_FAILED


class BalanceQueryError(ChainManagerError):
    """Native balance lookup failed."""

    kind = ErrorKind.FAILED_TO_GET_BALANCE


# ============ Identifiers ============


class InvalidAddressError(ChainManagerError, ValueError):
    """Malformed address."""

    kind = ErrorKind.INVALID_ADDRESS


class InvalidHashError(ChainManagerError, ValueError):
    """Malformed transaction hash."""

    kind = ErrorKind.INVALID_HASH


# ============ Signing ============


class InvalidTransactionError(ChainManagerError):
    """Transaction is missing fields or its signed payload is unusable."""

    kind = ErrorKind.INVALID_TRANSACTION


class InvalidPrivateKeyError(ChainManagerError):
    """Private key could not be decoded."""

    kind = ErrorKind.INVALID_PRIVATE_KEY


class TransactionSigningError(ChainManagerError):
    """Signer failed to sign the transaction."""

    kind = ErrorKind.FAILED_TO_SIGN_TRANSACTION


# ============ Submission ============


class TransactionSubmissionError(ChainManagerError):
    """Node rejected the transaction for an unrecognised reason."""

    kind = ErrorKind.FAILED_TO_SEND_TRANSACTION


class InsufficientFundsError(TransactionSubmissionError):
    """Sender cannot pay for value plus gas."""

    kind = ErrorKind.INSUFFICIENT_FUNDS


class MaxGasCapExceededError(TransactionSubmissionError):
    """Gas limit is above the block gas limit."""

    kind = ErrorKind.MAX_GAS_CAP_EXCEEDED


class ReplacementUnderpricedError(TransactionSubmissionError):
    """Replacement transaction does not bump the fee enough."""

    kind = ErrorKind.REPLACEMENT_UNDERPRICED


class NonceTooLowError(TransactionSubmissionError):
    """Nonce already used by a mined transaction."""

    kind = ErrorKind.NONCE_TOO_LOW


# ============ Retrieval ============


class TransactionRetrievalError(ChainManagerError):
    """Transaction or receipt lookup failed."""

    kind = ErrorKind.FAILED_TO_RETRIEVE_TRANSACTION
