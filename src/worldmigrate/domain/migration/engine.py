"""Migration of a world from its diff.

A migration runs four phases, each finished before the next one starts:

1) ensure the world: declare and deploy a new world class if needed
2) sync resources: register namespaces, then declare classes and
   register/upgrade contracts, models and events
3) sync permissions: grant writers and owners missing on-chain
4) initialize contracts that were never initialized

Permissions are applied before initialization because initializers may write
to resources.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from worldmigrate.config.txn import TxnConfig
from worldmigrate.domain.diff import Created, Synced, WorldSynced
from worldmigrate.domain.felt import felt_to_hex, parse_felt
from worldmigrate.domain.naming import compute_world_address, world_salt
from worldmigrate.domain.resources import (
    ContractLocal,
    ContractRemote,
    EventLocal,
    ModelLocal,
    NamespaceLocal,
    ResourceType,
)

from .declarer import Declarer
from .deployer import Deployer
from .errors import (
    ContractAlreadyDeployedError,
    DeploymentError,
    InitCallArgumentError,
    MigrationConfigurationError,
    WorldClassMissingError,
)
from .invoker import Invoker
from .permissions import PermissionKind, missing_grants

if TYPE_CHECKING:
    from collections.abc import Sequence

    from worldmigrate.config.profile import ProfileConfig
    from worldmigrate.domain.calls import Call, WorldContract
    from worldmigrate.domain.diff import ResourceDiff, WorldDiff
    from worldmigrate.domain.ports.submitter import Submitter
    from worldmigrate.domain.resources import LocalResource

    from .permissions import Grant

type ProgressCallback = Callable[[str], None]

log = getLogger(__name__)


def _log_progress(message: str) -> None:
    log.info(message)


@dataclass(slots=True)
class MigrationResult:
    """Summary of one migration run."""

    world_address: int
    world_deployed: bool = False
    declared_classes: int = 0
    resource_calls: int = 0
    permission_calls: int = 0
    init_calls: int = 0

    @property
    def total_calls(self) -> int:
        return self.resource_calls + self.permission_calls + self.init_calls


@dataclass(slots=True)
class Migration:
    """Bring the world at ``world.address`` in line with ``diff``."""

    diff: WorldDiff
    world: WorldContract
    submitter: Submitter
    profile: ProfileConfig
    txn_config: TxnConfig = field(default_factory=TxnConfig)

    async def migrate(self, progress: ProgressCallback | None = None) -> MigrationResult:
        """Run all phases; the first error aborts the remaining ones."""

        report = progress or _log_progress
        multicall = self.profile.use_multicall
        result = MigrationResult(world_address=self.world.address)

        # Configuration errors surface before anything is submitted.
        grants = self.plan_grants()
        init_calls = self.plan_init_calls()

        report("Deploying world...")
        result.world_deployed = await self.ensure_world()

        report("Syncing resources...")
        result.declared_classes, result.resource_calls = await self.sync_resources(
            multicall=multicall
        )

        report("Syncing permissions...")
        result.permission_calls = await self.sync_permissions(multicall=multicall, grants=grants)

        report("Initializing contracts...")
        result.init_calls = await self.initialize_contracts(
            multicall=multicall, calls=init_calls
        )

        report(f"Migration successful with world at address {felt_to_hex(self.world.address)}")
        return result

    async def ensure_world(self) -> bool:
        """Declare and deploy the world when its class changed.

        Returns ``True`` when a new world was deployed.
        """

        status = self.diff.world_status
        if isinstance(status, WorldSynced):
            log.debug("World is up to date")
            return False

        compiled = status.compiled
        if compiled is None:
            raise WorldClassMissingError

        try:
            salt = world_salt(self.profile.world.seed)
        except ValueError as exc:
            raise MigrationConfigurationError(
                f"Invalid world seed {self.profile.world.seed!r}"
            ) from exc

        expected = compute_world_address(compiled.class_hash, self.profile.world.seed)
        if expected != self.world.address:
            raise DeploymentError(
                expected,
                f"World would be deployed at {felt_to_hex(expected)} but migration targets "
                f"{felt_to_hex(self.world.address)}",
            )

        log.debug("Declaring and deploying world")
        await Declarer(self.submitter, self.txn_config).declare(compiled)

        deployer = Deployer(self.submitter, self.txn_config)
        try:
            await deployer.deploy_via_udc(
                class_hash=compiled.class_hash,
                salt=salt,
                constructor_calldata=[compiled.class_hash],
            )
        except ContractAlreadyDeployedError as exc:
            log.info("World already deployed at %s", felt_to_hex(exc.address))
            return False
        return True

    async def sync_resources(self, *, multicall: bool) -> tuple[int, int]:
        """Declare classes and register or upgrade resources.

        Returns the number of classes submitted for declaration and the number
        of executed calls.
        """

        invoker = Invoker(self.submitter, self.txn_config)
        declarer = Declarer(self.submitter, self.txn_config)

        # Contracts, models and events live in a namespace, which comes first.
        invoker.add_calls(self._namespace_calls())

        for diff in self.diff.resources.values():
            if diff.resource_type is ResourceType.NAMESPACE:
                continue
            call = self._resource_call(diff, declarer)
            if call is not None:
                invoker.add_call(call)

        declared = len(declarer)
        await declarer.declare_all()

        call_count = len(invoker)
        await invoker.execute(multicall=multicall)
        return declared, call_count

    def plan_grants(self) -> list[Grant]:
        """Writer grants then owner grants missing on-chain.

        Remote permissions absent from the profile are not revoked.
        """

        addresses = self.diff.contract_addresses(self.world.address)
        return [
            *missing_grants(
                self.diff.local_writers,
                self.diff.remote_writers(),
                addresses,
                kind=PermissionKind.WRITER,
            ),
            *missing_grants(
                self.diff.local_owners,
                self.diff.remote_owners(),
                addresses,
                kind=PermissionKind.OWNER,
            ),
        ]

    def plan_init_calls(self) -> list[Call]:
        """``init_contract`` calls for every contract not yet initialized."""

        calls: list[Call] = []
        for selector, diff in self.diff.resources.items():
            if diff.resource_type is not ResourceType.CONTRACT or not _needs_init(diff):
                continue
            args = _parse_init_call_args(diff.tag, self.profile.init_call_args.get(diff.tag, ()))
            log.debug("Initializing contract %s with %s", diff.tag, args)
            calls.append(self.world.init_contract_call(selector=selector, init_calldata=args))
        return calls

    async def sync_permissions(
        self, *, multicall: bool, grants: Sequence[Grant] | None = None
    ) -> int:
        invoker = Invoker(self.submitter, self.txn_config)
        for grant in self.plan_grants() if grants is None else grants:
            log.debug(
                "Granting %s permission on %s to %s (%s)",
                grant.kind,
                grant.target_tag,
                grant.grantee_tag,
                felt_to_hex(grant.grantee_address),
            )
            invoker.add_call(grant.to_call(self.world))

        call_count = len(invoker)
        await invoker.execute(multicall=multicall)
        return call_count

    async def initialize_contracts(
        self, *, multicall: bool, calls: Sequence[Call] | None = None
    ) -> int:
        invoker = Invoker(self.submitter, self.txn_config)
        invoker.add_calls(self.plan_init_calls() if calls is None else calls)

        call_count = len(invoker)
        await invoker.execute(multicall=multicall)
        return call_count

    def _namespace_calls(self) -> list[Call]:
        calls: list[Call] = []
        for diff in self.diff.namespace_diffs():
            if isinstance(diff, Created) and isinstance(diff.local, NamespaceLocal):
                log.debug("Registering namespace %s", diff.local.name)
                calls.append(self.world.register_namespace_call(diff.local.name))
        return calls

    def _resource_call(self, diff: ResourceDiff, declarer: Declarer) -> Call | None:
        if isinstance(diff, Synced):
            return None

        local = diff.local
        if isinstance(local, NamespaceLocal):
            return None
        declarer.add_class(local.compiled)

        if isinstance(diff, Created):
            log.debug(
                "Registering %s %s with class %s",
                local.resource_type,
                local.tag,
                felt_to_hex(local.class_hash),
            )
            return self._register_call(local)

        log.debug(
            "Upgrading %s %s to class %s",
            local.resource_type,
            local.tag,
            felt_to_hex(local.class_hash),
        )
        return self._upgrade_call(local)

    def _register_call(self, local: LocalResource) -> Call:
        if isinstance(local, ContractLocal):
            return self.world.register_contract_call(
                selector=local.selector,
                namespace=local.namespace,
                class_hash=local.class_hash,
            )
        if isinstance(local, ModelLocal):
            return self.world.register_model_call(
                namespace=local.namespace, class_hash=local.class_hash
            )
        if isinstance(local, EventLocal):
            return self.world.register_event_call(
                namespace=local.namespace, class_hash=local.class_hash
            )
        raise TypeError(f"Unsupported resource for registration: {local.tag}")

    def _upgrade_call(self, local: LocalResource) -> Call:
        if isinstance(local, ContractLocal):
            return self.world.upgrade_contract_call(
                namespace=local.namespace, class_hash=local.class_hash
            )
        if isinstance(local, ModelLocal):
            return self.world.upgrade_model_call(
                namespace=local.namespace, class_hash=local.class_hash
            )
        if isinstance(local, EventLocal):
            return self.world.upgrade_event_call(
                namespace=local.namespace, class_hash=local.class_hash
            )
        raise TypeError(f"Unsupported resource for upgrade: {local.tag}")


def _needs_init(diff: ResourceDiff) -> bool:
    if isinstance(diff, Created):
        return isinstance(diff.local, ContractLocal)
    return isinstance(diff.remote, ContractRemote) and not diff.remote.is_initialized


def _parse_init_call_args(tag: str, raw_args: Sequence[str]) -> list[int]:
    # Only felts are supported; addresses and class hashes are resolved by the world.
    args: list[int] = []
    for raw in raw_args:
        try:
            args.append(parse_felt(raw))
        except ValueError as exc:
            raise InitCallArgumentError(tag, raw) from exc
    return args
