"""Translate diff documents into domain diffs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, cast

from pydantic import ValidationError

from worldmigrate.config.errors import ConfigurationError
from worldmigrate.domain.diff import (
    Created,
    Synced,
    Updated,
    WorldDiff,
    WorldNewVersion,
    WorldNotDeployed,
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
)

from .schema import DiffDocument

if TYPE_CHECKING:
    from collections.abc import Mapping

    from worldmigrate.config.profile import ProfileConfig
    from worldmigrate.domain.diff import ResourceDiff, WorldStatus
    from worldmigrate.domain.resources import LocalResource, RemoteResource

    from .schema import ClassPayload, RemotePayload, ResourcePayload, WorldPayload


class DiffDocumentError(ConfigurationError):
    """Raised when a diff document cannot be read or is inconsistent."""


def load_world_diff(path: Path | str, *, profile: ProfileConfig) -> WorldDiff:
    """Read the diff document at ``path``; artifact paths are relative to it."""

    document_path = Path(path)
    try:
        payload = json.loads(document_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise DiffDocumentError(f"Diff document not found: {document_path}") from exc
    except json.JSONDecodeError as exc:
        raise DiffDocumentError(f"Invalid JSON in {document_path}: {exc}") from exc
    return parse_world_diff(payload, profile=profile, base_dir=document_path.parent)


def parse_world_diff(
    payload: object,
    *,
    profile: ProfileConfig,
    base_dir: Path | None = None,
) -> WorldDiff:
    try:
        document = DiffDocument.model_validate(payload)
    except ValidationError as exc:
        raise DiffDocumentError(f"Invalid diff document: {exc}") from exc

    translator = _Translator(base_dir=base_dir or Path.cwd())
    resources: dict[int, ResourceDiff] = {}
    namespaces: list[int] = []
    for resource_payload in document.resources:
        diff = translator.resource_diff(resource_payload)
        if diff.selector in resources:
            raise DiffDocumentError(f"Duplicate resource in diff document: {diff.tag}")
        resources[diff.selector] = diff
        if resource_payload.type == "namespace":
            namespaces.append(diff.selector)

    try:
        local_writers = local_permissions_from_tags(profile.writers)
        local_owners = local_permissions_from_tags(profile.owners)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid permission in profile: {exc}") from exc

    return WorldDiff(
        world_status=translator.world_status(document.world),
        namespaces=tuple(namespaces),
        resources=resources,
        local_writers=local_writers,
        local_owners=local_owners,
    )


class _Translator:
    def __init__(self, *, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._artifacts: dict[Path, Mapping[str, object]] = {}

    def world_status(self, payload: WorldPayload) -> WorldStatus:
        if payload.status == "synced":
            return WorldSynced()
        compiled = self._compiled(payload.compiled) if payload.compiled is not None else None
        if payload.status == "not_deployed":
            return WorldNotDeployed(compiled)
        return WorldNewVersion(cast("CompiledClass", compiled))

    def resource_diff(self, payload: ResourcePayload) -> ResourceDiff:
        if payload.status == "created":
            return Created(self._local(payload))
        remote = self._remote(payload, cast("RemotePayload", payload.remote))
        if payload.status == "updated":
            return Updated(self._local(payload), remote)
        return Synced(remote)

    def _local(self, payload: ResourcePayload) -> LocalResource:
        if payload.type == "namespace":
            return NamespaceLocal(name=payload.name)

        namespace = cast("str", payload.namespace)
        compiled = self._compiled(cast("ClassPayload", payload.compiled))
        if payload.type == "contract":
            return ContractLocal(namespace=namespace, name=payload.name, compiled=compiled)
        if payload.type == "model":
            return ModelLocal(namespace=namespace, name=payload.name, compiled=compiled)
        return EventLocal(namespace=namespace, name=payload.name, compiled=compiled)

    def _remote(self, payload: ResourcePayload, remote: RemotePayload) -> RemoteResource:
        writers = frozenset(remote.writers)
        owners = frozenset(remote.owners)
        if payload.type == "namespace":
            return NamespaceRemote(name=payload.name, writers=writers, owners=owners)

        namespace = cast("str", payload.namespace)
        if payload.type == "contract":
            return ContractRemote(
                namespace=namespace,
                name=payload.name,
                address=remote.address,
                class_hash=remote.class_hash,
                writers=writers,
                owners=owners,
                is_initialized=remote.is_initialized,
            )
        remote_type = ModelRemote if payload.type == "model" else EventRemote
        return remote_type(
            namespace=namespace,
            name=payload.name,
            address=remote.address,
            class_hash=remote.class_hash,
            writers=writers,
            owners=owners,
        )

    def _compiled(self, payload: ClassPayload) -> CompiledClass:
        artifact = payload.artifact
        if artifact is None:
            artifact = self._read_artifact(cast("str", payload.artifact_path))
        return CompiledClass(
            class_hash=payload.class_hash,
            casm_class_hash=payload.casm_class_hash,
            artifact=artifact,
        )

    def _read_artifact(self, relative_path: str) -> Mapping[str, object]:
        path = (self._base_dir / relative_path).resolve()
        cached = self._artifacts.get(path)
        if cached is not None:
            return cached
        try:
            artifact = cast("dict[str, object]", json.loads(path.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError) as exc:
            raise DiffDocumentError(f"Cannot read class artifact {path}: {exc}") from exc
        self._artifacts[path] = artifact
        return artifact
