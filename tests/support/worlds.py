from __future__ import annotations

from typing import TYPE_CHECKING

from worldmigrate.config import ProfileConfig
from worldmigrate.domain.diff import (
    Created,
    Synced,
    Updated,
    WorldDiff,
    WorldSynced,
    local_permissions_from_tags,
)
from worldmigrate.domain.resources import (
    CompiledClass,
    ContractLocal,
    ContractRemote,
    EventLocal,
    EventRemote,
    ModelLocal,
    ModelRemote,
    NamespaceLocal,
    NamespaceRemote,
    ResourceType,
)

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from worldmigrate.domain.diff import ResourceDiff, WorldStatus

WORLD_ADDRESS = 0x1234


def make_class(seed: int) -> CompiledClass:
    return CompiledClass(
        class_hash=0x1000 + seed,
        casm_class_hash=0x2000 + seed,
        artifact={"contract_class_version": "0.1.0", "seed": seed},
    )


def created_namespace(name: str) -> Created:
    return Created(NamespaceLocal(name=name))


def synced_namespace(
    name: str,
    *,
    writers: Sequence[int] = (),
    owners: Sequence[int] = (),
) -> Synced:
    return Synced(NamespaceRemote(name=name, writers=frozenset(writers), owners=frozenset(owners)))


def created_contract(namespace: str, name: str, compiled: CompiledClass) -> Created:
    return Created(ContractLocal(namespace=namespace, name=name, compiled=compiled))


def created_model(namespace: str, name: str, compiled: CompiledClass) -> Created:
    return Created(ModelLocal(namespace=namespace, name=name, compiled=compiled))


def created_event(namespace: str, name: str, compiled: CompiledClass) -> Created:
    return Created(EventLocal(namespace=namespace, name=name, compiled=compiled))


def contract_remote(
    namespace: str,
    name: str,
    *,
    address: int,
    class_hash: int = 0xDEAD,
    is_initialized: bool = True,
    writers: Sequence[int] = (),
    owners: Sequence[int] = (),
) -> ContractRemote:
    return ContractRemote(
        namespace=namespace,
        name=name,
        address=address,
        class_hash=class_hash,
        writers=frozenset(writers),
        owners=frozenset(owners),
        is_initialized=is_initialized,
    )


def updated_contract(
    namespace: str,
    name: str,
    compiled: CompiledClass,
    *,
    address: int,
    is_initialized: bool = True,
) -> Updated:
    return Updated(
        ContractLocal(namespace=namespace, name=name, compiled=compiled),
        contract_remote(namespace, name, address=address, is_initialized=is_initialized),
    )


def synced_contract(
    namespace: str,
    name: str,
    *,
    address: int,
    is_initialized: bool = True,
    writers: Sequence[int] = (),
    owners: Sequence[int] = (),
) -> Synced:
    return Synced(
        contract_remote(
            namespace,
            name,
            address=address,
            is_initialized=is_initialized,
            writers=writers,
            owners=owners,
        )
    )


def updated_model(namespace: str, name: str, compiled: CompiledClass) -> Updated:
    return Updated(
        ModelLocal(namespace=namespace, name=name, compiled=compiled),
        ModelRemote(namespace=namespace, name=name, address=0xF00, class_hash=0xBEEF),
    )


def updated_event(namespace: str, name: str, compiled: CompiledClass) -> Updated:
    return Updated(
        EventLocal(namespace=namespace, name=name, compiled=compiled),
        EventRemote(namespace=namespace, name=name, address=0xE00, class_hash=0xCAFE),
    )


def build_diff(
    *diffs: ResourceDiff,
    world_status: WorldStatus | None = None,
    writers: Mapping[str, Sequence[str]] | None = None,
    owners: Mapping[str, Sequence[str]] | None = None,
) -> WorldDiff:
    return WorldDiff(
        world_status=world_status or WorldSynced(),
        namespaces=tuple(
            diff.selector for diff in diffs if diff.resource_type is ResourceType.NAMESPACE
        ),
        resources={diff.selector: diff for diff in diffs},
        local_writers=local_permissions_from_tags(writers or {}),
        local_owners=local_permissions_from_tags(owners or {}),
    )


def make_profile(**sections: object) -> ProfileConfig:
    payload: dict[str, object] = {"world": {"seed": "test-seed"}}
    payload.update(sections)
    return ProfileConfig.model_validate(payload)
