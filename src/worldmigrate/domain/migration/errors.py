"""Errors raised by the migration engine.

Every error aborts the current run. Re-running the migration is the recovery
path: the diff is recomputed against the chain and finished work produces no
new calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from worldmigrate.config.errors import ConfigurationError
from worldmigrate.domain.felt import felt_to_hex

if TYPE_CHECKING:
    from worldmigrate.domain.calls import Call


class MigrationError(RuntimeError):
    """Base class for migration failures."""


class MigrationConfigurationError(MigrationError, ConfigurationError):
    """The profile or the diff cannot be migrated as declared."""


class OrphanSelectorAddressError(MigrationConfigurationError):
    """A permission grantee does not resolve to a contract of the world."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"No contract address found for grantee {tag!r}")
        self.tag = tag


class InitCallArgumentError(MigrationConfigurationError):
    """An initialization argument is not a valid field element."""

    def __init__(self, tag: str, value: str) -> None:
        super().__init__(f"Invalid init call argument {value!r} for contract {tag!r}")
        self.tag = tag
        self.value = value


class WorldClassMissingError(MigrationConfigurationError):
    """The world must be deployed but the project carries no world class."""

    def __init__(self) -> None:
        super().__init__("World is not deployed and no world class is available to deploy it")


class DeclarationError(MigrationError):
    """Declaring a class failed for a reason other than it being already declared."""

    def __init__(self, casm_class_hash: int) -> None:
        super().__init__(f"Failed to declare class with casm hash {felt_to_hex(casm_class_hash)}")
        self.casm_class_hash = casm_class_hash


class DeploymentError(MigrationError):
    """Deploying a contract through the UDC failed."""

    def __init__(self, address: int, message: str | None = None) -> None:
        super().__init__(message or f"Failed to deploy contract at {felt_to_hex(address)}")
        self.address = address


class ContractAlreadyDeployedError(DeploymentError):
    """A contract already exists at the derived deployment address."""

    def __init__(self, address: int, class_hash: int) -> None:
        super().__init__(
            address,
            f"Contract with class {felt_to_hex(class_hash)} already deployed at "
            f"{felt_to_hex(address)}",
        )
        self.class_hash = class_hash


class ExecutionError(MigrationError):
    """A batched or sequential call failed.

    ``call_index`` is the position of the failing call in the batch, ``None``
    when an atomic batch failed as a whole. ``committed`` counts the calls that
    were already applied and cannot be rolled back. ``unconfirmed_hash`` is set
    when the failing transaction was sent but never confirmed, so its calls may
    or may not have been applied.
    """

    def __init__(
        self,
        *,
        calls: tuple[Call, ...],
        call_index: int | None,
        committed: int,
        unconfirmed_hash: int | None = None,
    ) -> None:
        if call_index is None:
            subject = f"Multicall of {len(calls)} calls"
        else:
            subject = f"Call #{call_index} ({calls[call_index].describe()})"
        if unconfirmed_hash is not None:
            message = (
                f"{subject} was sent in transaction {felt_to_hex(unconfirmed_hash)} "
                f"but its outcome is unknown"
            )
        elif call_index is None:
            message = f"{subject} failed, no call was applied"
        else:
            message = f"{subject} failed"
        if call_index is not None:
            message = f"{message} after {committed} committed call(s)"
        super().__init__(message)
        self.calls = calls
        self.call_index = call_index
        self.committed = committed
        self.unconfirmed_hash = unconfirmed_hash

    
    def outcome_known(self) -> bool:
        return self.unconfirmed_hash is None

    @property
    def failed_call(self) -> Call | None:
        if self.call_index is None:
            return None
        return self.calls[self.call_index]
