"""Submission helpers shared by the invoker, declarer and deployer."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from worldmigrate.domain.felt import felt_to_hex
from worldmigrate.domain.ports.submitter import (
    TransactionError,
    TransactionRevertedError,
    TransactionStatusUnknownError,
)

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from typing import Any

    from worldmigrate.config.txn import TxnConfig
    from worldmigrate.domain.ports.submitter import Submitter, TransactionResult

log = getLogger(__name__)


async def confirm(
    result: TransactionResult,
    *,
    submitter: Submitter,
    txn_config: TxnConfig,
) -> TransactionResult:
    """Wait for ``result`` according to the confirmation policy.

    A revert means the transaction applied nothing. Any other failure while
    waiting leaves its outcome unknown and raises
    :class:`TransactionStatusUnknownError`.
    """

    if not txn_config.wait:
        return result
    try:
        await submitter.wait_for_transaction(result.transaction_hash)
    except TransactionRevertedError:
        raise
    except TransactionError as exc:
        raise TransactionStatusUnknownError(
            f"Could not confirm transaction {felt_to_hex(result.transaction_hash)}: {exc}",
            transaction_hash=result.transaction_hash,
            code=exc.code,
        ) from exc
    if txn_config.receipt:
        log.info("Transaction %s accepted", felt_to_hex(result.transaction_hash))
    return result


async def settle[T](operation: Coroutine[Any, Any, T]) -> T:
    """Run ``operation`` to completion even when the caller gets cancelled.

    A transaction that was already sent cannot be recalled; cancelling while
    waiting for it would hide whether it was applied. The cancellation is
    re-raised once the operation has settled.
    """

    task = asyncio.ensure_future(operation)
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        if not task.done():
            log.warning("Cancellation requested, waiting for in-flight transaction to settle")
            await asyncio.wait({task})
        if not task.cancelled() and task.exception() is not None:
            log.error("In-flight transaction failed during cancellation: %s", task.exception())
        raise
