"""Port for submitting signed transactions to the chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from worldmigrate.domain.calls import Call
    from worldmigrate.domain.resources import CompiledClass


@dataclass(frozen=True, slots=True)
class TransactionResult:
    """Transaction accepted by the node."""

    transaction_hash: int
    class_hash: int | None = None


class TransactionError(RuntimeError):
    """Raised by submitters when the node refuses or reverts a transaction."""

    def __init__(
        self,
        message: str,
        *,
        transaction_hash: int | None = None,
        code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.transaction_hash = transaction_hash
        self.code = code


class ClassAlreadyDeclaredError(TransactionError):
    """The class is already declared on-chain."""


class SigningError(TransactionError):
    """The account could not sign or its signature was rejected."""


class TransactionRevertedError(TransactionError):
    """The transaction was included but its execution reverted."""


class TransactionStatusUnknownError(TransactionError):
    """The transaction was sent but its outcome could not be confirmed."""


@runtime_checkable
class Submitter(Protocol):
    """Declare/execute capability of one account connected to a node."""

    @property
    def address(self) -> int: ...

    async def declare(self, compiled: CompiledClass) -> TransactionResult: ...

    async def execute(self, calls: Sequence[Call]) -> TransactionResult:
        """Submit ``calls`` as one transaction; they succeed or fail together."""
        ...

    async def wait_for_transaction(self, transaction_hash: int) -> None:
        """Block until the transaction is accepted, raising if it reverted."""
        ...

    async def class_hash_at(self, address: int) -> int | None:
        """Class hash deployed at ``address``, ``None`` when nothing is deployed."""
        ...


__all__ = [
    "ClassAlreadyDeclaredError",
    "SigningError",
    "Submitter",
    "TransactionError",
    "TransactionResult",
    "TransactionRevertedError",
]
