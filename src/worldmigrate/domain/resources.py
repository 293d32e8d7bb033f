"""Local and remote views of world resources.

Local resources come from the compiled project; remote resources are what the
world currently reports on-chain. Both are immutable snapshots produced by the
diff computation and only read during a migration.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from .naming import compute_bytearray_hash, compute_selector_from_names, get_tag


class ResourceType(StrEnum):
    NAMESPACE = "namespace"
    CONTRACT = "contract"
    MODEL = "model"
    EVENT = "event"


@dataclass(frozen=True, slots=True, kw_only=True)
class CompiledClass:
    """A declarable class and its compiled artifact.

    ``casm_class_hash`` is derived from the compiled code and identifies the
    artifact; two resources sharing it share one declaration.
    """

    class_hash: int
    casm_class_hash: int
    artifact: Mapping[str, object] = field(repr=False, compare=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class NamespaceLocal:
    resource_type: ClassVar[ResourceType] = ResourceType.NAMESPACE

    name: str

    @property
    def namespace(self) -> str:
        return self.name

    @property
    def tag(self) -> str:
        return self.name

    @property
    def selector(self) -> int:
        return compute_bytearray_hash(self.name)


@dataclass(frozen=True, slots=True, kw_only=True)
class _NamespacedLocal:
    namespace: str
    name: str
    compiled: CompiledClass

    @property
    def tag(self) -> str:
        return get_tag(self.namespace, self.name)

    @property
    def selector(self) -> int:
        return compute_selector_from_names(self.namespace, self.name)

    @property
    def class_hash(self) -> int:
        return self.compiled.class_hash

    @property
    def casm_class_hash(self) -> int:
        return self.compiled.casm_class_hash


@dataclass(frozen=True, slots=True, kw_only=True)
class ContractLocal(_NamespacedLocal):
    resource_type: ClassVar[ResourceType] = ResourceType.CONTRACT


@dataclass(frozen=True, slots=True, kw_only=True)
class ModelLocal(_NamespacedLocal):
    resource_type: ClassVar[ResourceType] = ResourceType.MODEL


@dataclass(frozen=True, slots=True, kw_only=True)
class EventLocal(_NamespacedLocal):
    resource_type: ClassVar[ResourceType] = ResourceType.EVENT


type LocalResource = NamespaceLocal | ContractLocal | ModelLocal | EventLocal


@dataclass(frozen=True, slots=True, kw_only=True)
class NamespaceRemote:
    resource_type: ClassVar[ResourceType] = ResourceType.NAMESPACE

    name: str
    writers: frozenset[int] = frozenset()
    owners: frozenset[int] = frozenset()

    @property
    def namespace(self) -> str:
        return self.name

    @property
    def tag(self) -> str:
        return self.name

    @property
    def selector(self) -> int:
        return compute_bytearray_hash(self.name)


@dataclass(frozen=True, slots=True, kw_only=True)
class _NamespacedRemote:
    namespace: str
    name: str
    address: int
    class_hash: int
    writers: frozenset[int] = frozenset()
    owners: frozenset[int] = frozenset()

    @property
    def tag(self) -> str:
        return get_tag(self.namespace, self.name)

    @property
    def selector(self) -> int:
        return compute_selector_from_names(self.namespace, self.name)


@dataclass(frozen=True, slots=True, kw_only=True)
class ContractRemote(_NamespacedRemote):
    resource_type: ClassVar[ResourceType] = ResourceType.CONTRACT

    is_initialized: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ModelRemote(_NamespacedRemote):
    resource_type: ClassVar[ResourceType] = ResourceType.MODEL


@dataclass(frozen=True, slots=True, kw_only=True)
class EventRemote(_NamespacedRemote):
    resource_type: ClassVar[ResourceType] = ResourceType.EVENT


type RemoteResource = NamespaceRemote | ContractRemote | ModelRemote | EventRemote
