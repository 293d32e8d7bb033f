"""Migration engine: ordered phases over a world diff.

Building blocks, leaves first:
- ``Invoker`` batches calls and executes them atomically or sequentially
- ``Declarer`` declares each unique class once
- ``Deployer`` deploys through the universal deployer contract
- ``missing_grants`` computes permissions to grant
- ``Migration`` sequences the phases
"""

from __future__ import annotations

from .declarer import DeclarationOutcome, Declarer
from .deployer import Deployer, DeployResult, compute_udc_address
from .engine import Migration, MigrationResult, ProgressCallback
from .errors import (
    ContractAlreadyDeployedError,
    DeclarationError,
    DeploymentError,
    ExecutionError,
    InitCallArgumentError,
    MigrationConfigurationError,
    MigrationError,
    OrphanSelectorAddressError,
    WorldClassMissingError,
)
from .invoker import Invoker
from .permissions import Grant, PermissionKind, missing_grants

__all__ = [
    "ContractAlreadyDeployedError",
    "DeclarationError",
    "DeclarationOutcome",
    "Declarer",
    "DeployResult",
    "Deployer",
    "DeploymentError",
    "ExecutionError",
    "Grant",
    "InitCallArgumentError",
    "Invoker",
    "Migration",
    "MigrationConfigurationError",
    "MigrationError",
    "MigrationResult",
    "OrphanSelectorAddressError",
    "PermissionKind",
    "ProgressCallback",
    "WorldClassMissingError",
    "compute_udc_address",
    "missing_grants",
]
