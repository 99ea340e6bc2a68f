"""Classification of transaction submission failures.

EVM nodes report submission failures as free text. The table below maps
known message fragments to error types; matching is case-insensitive and the
first matching row wins. A node changing its wording silently drops the
failure into the generic ``TransactionSubmissionError``.
"""

from multichain.core.exceptions import (
    InsufficientFundsError,
    MaxGasCapExceededError,
    NonceTooLowError,
    ReplacementUnderpricedError,
    TransactionSubmissionError,
)

SUBMISSION_ERROR_PATTERNS: tuple[tuple[str, type[TransactionSubmissionError]], ...] = (
    ("insufficient funds", InsufficientFundsError),
    ("exceeds block gas limit", MaxGasCapExceededError),
    ("gas limit reached", MaxGasCapExceededError),
    ("replacement transaction underpriced", ReplacementUnderpricedError),
    ("nonce too low", NonceTooLowError),
)


def submission_error_type(message: str) -> type[TransactionSubmissionError]:
    """Return the error type for a node's submission error text."""
    lowered = message.lower()
    for fragment, error_type in SUBMISSION_ERROR_PATTERNS:
        if fragment in lowered:
            return error_type
    return TransactionSubmissionError


def classify_submission_error(error: BaseException) -> TransactionSubmissionError:
    """Wrap a node submission failure in its domain error.

    The caller raises the result ``from error``.
    """
    error_type = submission_error_type(_error_text(error))
    return error_type.wrap(error)


def _error_text(error: BaseException) -> str:
    # web3 RPC errors carry the node's message in a dict argument
    for arg in error.args:
        if isinstance(arg, dict) and isinstance(arg.get("message"), str):
            return arg["message"]
    return str(error)
