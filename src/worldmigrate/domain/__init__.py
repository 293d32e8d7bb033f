"""World model, diff and migration engine."""

from __future__ import annotations

from .calls import Call, WorldContract
from .diff import (
    Created,
    LocalPermission,
    ResourceDiff,
    Synced,
    Updated,
    WorldDiff,
    WorldNewVersion,
    WorldNotDeployed,
    WorldStatus,
    WorldSynced,
    local_permissions_from_tags,
)
from .resources import (
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

__all__ = [
    "Call",
    "CompiledClass",
    "ContractLocal",
    "ContractRemote",
    "Created",
    "EventLocal",
    "EventRemote",
    "LocalPermission",
    "ModelLocal",
    "ModelRemote",
    "NamespaceLocal",
    "NamespaceRemote",
    "ResourceDiff",
    "ResourceType",
    "Synced",
    "Updated",
    "WorldContract",
    "WorldDiff",
    "WorldNewVersion",
    "WorldNotDeployed",
    "WorldStatus",
    "WorldSynced",
    "local_permissions_from_tags",
]
