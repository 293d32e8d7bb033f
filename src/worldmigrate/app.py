"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from worldmigrate.adapters.diff_document import load_world_diff
from worldmigrate.adapters.starknet import connect_submitter
from worldmigrate.config import (
    MissingConfigurationError,
    TxnConfig,
    get_account_config,
    load_profile_config,
)
from worldmigrate.domain.calls import WorldContract
from worldmigrate.domain.diff import WorldNotDeployed, WorldSynced
from worldmigrate.domain.felt import felt_to_hex
from worldmigrate.domain.migration import Migration, WorldClassMissingError
from worldmigrate.domain.naming import compute_world_address

if TYPE_CHECKING:
    from pathlib import Path

    from worldmigrate.config import ProfileConfig
    from worldmigrate.domain.diff import WorldDiff
    from worldmigrate.domain.migration import MigrationResult, ProgressCallback
    from worldmigrate.domain.ports.submitter import Submitter

log = getLogger(__name__)


def resolve_world_address(diff: WorldDiff, profile: ProfileConfig) -> int:
    """Address the migration targets.

    A world about to be deployed lives at the address derived from its class
    and the profile seed; otherwise the profile must name the address.
    """

    status = diff.world_status
    if not isinstance(status, WorldSynced) and status.compiled is not None:
        address = compute_world_address(status.compiled.class_hash, profile.world.seed)
        if profile.world.address is not None and profile.world.address != address:
            log.warning(
                "Profile world address %s differs from the new world address %s",
                felt_to_hex(profile.world.address),
                felt_to_hex(address),
            )
        return address

    if profile.world.address is not None:
        return profile.world.address
    if isinstance(status, WorldNotDeployed):
        raise WorldClassMissingError
    raise MissingConfigurationError("world.address is required for a deployed world")


async def migrate_world_async(
    *,
    diff: WorldDiff,
    profile: ProfileConfig,
    submitter: Submitter | None = None,
    txn_config: TxnConfig | None = None,
    progress: ProgressCallback | None = None,
) -> MigrationResult:
    effective_txn_config = txn_config or TxnConfig()
    world_address = resolve_world_address(diff, profile)
    effective_submitter = submitter or await connect_submitter(
        get_account_config(), txn_config=effective_txn_config
    )

    migration = Migration(
        diff=diff,
        world=WorldContract(world_address),
        submitter=effective_submitter,
        profile=profile,
        txn_config=effective_txn_config,
    )
    return await migration.migrate(progress)


def migrate_world(
    *,
    diff_path: Path | str,
    profile_path: Path | str | None = None,
    profile: ProfileConfig | None = None,
    submitter: Submitter | None = None,
    txn_config: TxnConfig | None = None,
    disable_multicall: bool = False,
    progress: ProgressCallback | None = None,
) -> MigrationResult:
    """Migrate the world described by the diff document at ``diff_path``."""

    if profile is None:
        if profile_path is None:
            raise MissingConfigurationError("A profile or a profile path is required")
        profile = load_profile_config(profile_path)
    if disable_multicall:
        profile = profile.with_multicall_disabled()

    diff = load_world_diff(diff_path, profile=profile)
    log.info(
        "Starting migration: diff=%s, resources=%s, multicall=%s",
        diff_path,
        len(diff.resources),
        profile.use_multicall,
    )

    result = asyncio.run(
        migrate_world_async(
            diff=diff,
            profile=profile,
            submitter=submitter,
            txn_config=txn_config,
            progress=progress,
        )
    )

    log.info(
        f"Finished migration: world={felt_to_hex(result.world_address)}, "
        f"deployed={result.world_deployed}, declared={result.declared_classes}, "
        f"calls={result.total_calls}"
    )
    return result
