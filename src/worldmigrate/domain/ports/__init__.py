"""Domain port definitions for adapters."""

from __future__ import annotations

from .submitter import (
    ClassAlreadyDeclaredError,
    SigningError,
    Submitter,
    TransactionError,
    TransactionResult,
    TransactionRevertedError,
    TransactionStatusUnknownError,
)

__all__ = [
    "ClassAlreadyDeclaredError",
    "SigningError",
    "Submitter",
    "TransactionError",
    "TransactionResult",
    "TransactionRevertedError",
    "TransactionStatusUnknownError",
]
