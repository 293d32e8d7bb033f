"""Call batching with atomic (multicall) or sequential execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from worldmigrate.domain.ports.submitter import (
    SigningError,
    TransactionError,
    TransactionStatusUnknownError,
)

from .errors import ExecutionError
from .transactions import confirm, settle

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from worldmigrate.config.txn import TxnConfig
    from worldmigrate.domain.calls import Call
    from worldmigrate.domain.ports.submitter import Submitter, TransactionResult

log = getLogger(__name__)


@dataclass(slots=True)
class Invoker:
    """Accumulate calls, then execute them exactly once.

    ``multicall`` submits the whole batch as one transaction: either every
    call is applied or none is. ``invoke_all_sequentially`` submits one
    transaction per call in insertion order; calls before a failing one stay
    applied, which :class:`ExecutionError` reports through ``committed``.
    """

    submitter: Submitter
    txn_config: TxnConfig
    calls: list[Call] = field(default_factory=list["Call"])

    def __len__(self) -> int:
        return len(self.calls)

    def add_call(self, call: Call) -> None:
        self.calls.append(call)

    def add_calls(self, calls: Iterable[Call]) -> None:
        self.calls.extend(calls)

    async def execute(self, *, multicall: bool) -> list[TransactionResult]:
        if multicall:
            result = await self.multicall()
            return [] if result is None else [result]
        return await self.invoke_all_sequentially()

    async def multicall(self) -> TransactionResult | None:
        calls = self._take_calls()
        if not calls:
            log.debug("No calls to execute")
            return None

        try:
            result = await settle(self._submit(calls))
        except SigningError:
            raise
        except TransactionStatusUnknownError as exc:
            raise ExecutionError(
                calls=calls,
                call_index=None,
                committed=0,
                unconfirmed_hash=exc.transaction_hash,
            ) from exc
        except TransactionError as exc:
            raise ExecutionError(calls=calls, call_index=None, committed=0) from exc

        log.info("Executed %s call(s) in one multicall", len(calls))
        return result

    async def invoke_all_sequentially(self) -> list[TransactionResult]:
        calls = self._take_calls()
        results: list[TransactionResult] = []
        for index, call in enumerate(calls):
            log.debug("Invoking call #%s: %s", index, call.describe())
            try:
                results.append(await settle(self._submit((call,))))
            except SigningError:
                raise
            except TransactionStatusUnknownError as exc:
                raise ExecutionError(
                    calls=calls,
                    call_index=index,
                    committed=index,
                    unconfirmed_hash=exc.transaction_hash,
                ) from exc
            except TransactionError as exc:
                raise ExecutionError(calls=calls, call_index=index, committed=index) from exc

        if calls:
            log.info("Executed %s call(s) sequentially", len(calls))
        return results

    async def _submit(self, calls: Sequence[Call]) -> TransactionResult:
        result = await self.submitter.execute(calls)
        return await confirm(result, submitter=self.submitter, txn_config=self.txn_config)

    def _take_calls(self) -> tuple[Call, ...]:
        calls = tuple(self.calls)
        self.calls.clear()
        return calls
