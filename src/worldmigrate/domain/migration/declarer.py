"""Deduplicated class declaration."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from worldmigrate.domain.felt import felt_to_hex
from worldmigrate.domain.ports.submitter import (
    ClassAlreadyDeclaredError,
    SigningError,
    TransactionError,
)

from .errors import DeclarationError
from .transactions import confirm, settle

if TYPE_CHECKING:
    from worldmigrate.config.txn import TxnConfig
    from worldmigrate.domain.ports.submitter import Submitter, TransactionResult
    from worldmigrate.domain.resources import CompiledClass

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeclarationOutcome:
    casm_class_hash: int
    class_hash: int
    transaction_hash: int | None = None

    @property
    def already_declared(self) -> bool:
        return self.transaction_hash is None


@dataclass(slots=True)
class Declarer:
    """Collect classes by artifact identity and declare each one once."""

    submitter: Submitter
    txn_config: TxnConfig
    classes: dict[int, CompiledClass] = field(default_factory=dict[int, "CompiledClass"])

    def __len__(self) -> int:
        return len(self.classes)

    def add_class(self, compiled: CompiledClass) -> bool:
        """Queue ``compiled``; return ``False`` when its artifact is already queued."""

        if compiled.casm_class_hash in self.classes:
            return False
        self.classes[compiled.casm_class_hash] = compiled
        return True

    async def declare_all(self) -> list[DeclarationOutcome]:
        pending = list(self.classes.values())
        self.classes.clear()
        return [await self.declare(compiled) for compiled in pending]

    async def declare(self, compiled: CompiledClass) -> DeclarationOutcome:
        casm_hex = felt_to_hex(compiled.casm_class_hash)
        try:
            result = await settle(self._submit(compiled))
        except ClassAlreadyDeclaredError:
            log.debug("Class %s already declared", felt_to_hex(compiled.class_hash))
            return DeclarationOutcome(
                casm_class_hash=compiled.casm_class_hash,
                class_hash=compiled.class_hash,
            )
        except SigningError:
            raise
        except TransactionError as exc:
            log.error("Declaration of %s failed: %s", casm_hex, exc)
            raise DeclarationError(compiled.casm_class_hash) from exc

        log.info(
            "Declared class %s (tx %s)",
            felt_to_hex(compiled.class_hash),
            felt_to_hex(result.transaction_hash),
        )
        return DeclarationOutcome(
            casm_class_hash=compiled.casm_class_hash,
            class_hash=compiled.class_hash,
            transaction_hash=result.transaction_hash,
        )

    async def _submit(self, compiled: CompiledClass) -> TransactionResult:
        result = await self.submitter.declare(compiled)
        return await confirm(result, submitter=self.submitter, txn_config=self.txn_config)
