"""Diff between the local world and its deployed counterpart.

The diff is computed outside of this package and handed to the migration as a
fully materialized, read-only structure:

- ``world_status`` tells whether the world contract itself must be deployed
- ``namespaces`` lists namespace selectors, registered before anything else
- ``resources`` maps each resource selector to exactly one diff variant
- local permissions come from the profile, remote ones from the resources
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .naming import compute_contract_address, compute_selector_from_tag
from .resources import ContractLocal, ContractRemote, ResourceType

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .resources import CompiledClass, LocalResource, RemoteResource


@dataclass(frozen=True, slots=True)
class Created:
    """Resource exists locally and is absent from the world."""

    local: LocalResource

    @property
    def tag(self) -> str:
        return self.local.tag

    @property
    def namespace(self) -> str:
        return self.local.namespace

    @property
    def resource_type(self) -> ResourceType:
        return self.local.resource_type

    @property
    def selector(self) -> int:
        return self.local.selector

    @property
    def remote(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class Updated:
    """Resource exists on both sides with a different class."""

    local: LocalResource
    remote: RemoteResource

    @property
    def tag(self) -> str:
        return self.local.tag

    @property
    def namespace(self) -> str:
        return self.local.namespace

    @property
    def resource_type(self) -> ResourceType:
        return self.local.resource_type

    @property
    def selector(self) -> int:
        return self.local.selector


@dataclass(frozen=True, slots=True)
class Synced:
    """Resource is identical on both sides."""

    remote: RemoteResource

    @property
    def tag(self) -> str:
        return self.remote.tag

    @property
    def namespace(self) -> str:
        return self.remote.namespace

    @property
    def resource_type(self) -> ResourceType:
        return self.remote.resource_type

    @property
    def selector(self) -> int:
        return self.remote.selector


type ResourceDiff = Created | Updated | Synced


@dataclass(frozen=True, slots=True)
class WorldNotDeployed:
    """No world exists at the expected address.

    ``compiled`` is the local world class when the project ships one.
    """

    compiled: CompiledClass | None = None


@dataclass(frozen=True, slots=True)
class WorldNewVersion:
    """The world class changed and a new world must be declared and deployed."""

    compiled: CompiledClass


@dataclass(frozen=True, slots=True)
class WorldSynced:
    pass


type WorldStatus = WorldNotDeployed | WorldNewVersion | WorldSynced


@dataclass(frozen=True, slots=True, kw_only=True)
class LocalPermission:
    """Grants declared in configuration for one target resource.

    ``grantees`` maps grantee selectors to their tags, in declaration order.
    """

    target_tag: str
    grantees: Mapping[int, str]


type LocalPermissions = dict[int, LocalPermission]
type RemotePermissions = dict[int, frozenset[int]]


def local_permissions_from_tags(grants: Mapping[str, Sequence[str]]) -> LocalPermissions:
    """Build a selector-keyed permission set from ``target tag -> grantee tags``."""

    permissions: LocalPermissions = {}
    for target_tag, grantee_tags in grants.items():
        grantees: dict[int, str] = {}
        for grantee_tag in grantee_tags:
            grantees.setdefault(compute_selector_from_tag(grantee_tag), grantee_tag)
        permissions[compute_selector_from_tag(target_tag)] = LocalPermission(
            target_tag=target_tag,
            grantees=grantees,
        )
    return permissions


@dataclass(slots=True, kw_only=True)
class WorldDiff:
    """Aggregate root for one migration run."""

    world_status: WorldStatus
    namespaces: tuple[int, ...] = ()
    resources: dict[int, ResourceDiff] = field(default_factory=dict[int, "ResourceDiff"])
    local_writers: LocalPermissions = field(default_factory=dict[int, LocalPermission])
    local_owners: LocalPermissions = field(default_factory=dict[int, LocalPermission])

    def __post_init__(self) -> None:
        for selector in self.namespaces:
            resource = self.resources.get(selector)
            if resource is None:
                raise ValueError(f"Namespace {selector:#x} is missing from the diff resources")
            if resource.resource_type is not ResourceType.NAMESPACE:
                raise ValueError(f"Resource {resource.tag} is listed as namespace")

    def namespace_diffs(self) -> tuple[ResourceDiff, ...]:
        return tuple(self.resources[selector] for selector in self.namespaces)

    def resource_for_tag(self, tag: str) -> ResourceDiff | None:
        return next((diff for diff in self.resources.values() if diff.tag == tag), None)

    def remote_writers(self) -> RemotePermissions:
        return {
            selector: diff.remote.writers
            for selector, diff in self.resources.items()
            if diff.remote is not None
        }

    def remote_owners(self) -> RemotePermissions:
        return {
            selector: diff.remote.owners
            for selector, diff in self.resources.items()
            if diff.remote is not None
        }

    def contract_addresses(self, world_address: int) -> dict[int, int]:
        """Addresses of every contract, keyed by selector.

        Registered contracts report their address; new ones are derived from
        the world address, their class hash and their selector.
        """

        addresses: dict[int, int] = {}
        for selector, diff in self.resources.items():
            if isinstance(diff, Created) and isinstance(diff.local, ContractLocal):
                addresses[selector] = compute_contract_address(
                    world_address=world_address,
                    class_hash=diff.local.class_hash,
                    selector=selector,
                )
            elif isinstance(diff, Updated | Synced) and isinstance(diff.remote, ContractRemote):
                addresses[selector] = diff.remote.address
        return addresses

    def is_synced(self) -> bool:
        """True when neither the world nor any resource needs a change."""

        return isinstance(self.world_status, WorldSynced) and all(
            isinstance(diff, Synced) for diff in self.resources.values()
        )
