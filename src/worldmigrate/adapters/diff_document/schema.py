"""Pydantic models describing a serialized world diff document."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator

from worldmigrate.domain.felt import parse_felt


def _felt_from_json(value: object) -> object:
    if isinstance(value, str):
        return parse_felt(value)
    return value


FeltValue = Annotated[int, BeforeValidator(_felt_from_json)]

ResourceKind = Literal["namespace", "contract", "model", "event"]
ResourceStatus = Literal["created", "updated", "synced"]
WorldState = Literal["not_deployed", "new_version", "synced"]


class DiffBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ClassPayload(DiffBaseModel):
    class_hash: FeltValue
    casm_class_hash: FeltValue
    artifact: dict[str, object] | None = None
    artifact_path: str | None = None

    @model_validator(mode="after")
    def _require_artifact(self) -> ClassPayload:
        if self.artifact is None and self.artifact_path is None:
            raise ValueError("class requires either 'artifact' or 'artifact_path'")
        return self


class RemotePayload(DiffBaseModel):
    address: FeltValue = 0
    class_hash: FeltValue = 0
    writers: list[FeltValue] = Field(default_factory=list)
    owners: list[FeltValue] = Field(default_factory=list)
    is_initialized: bool = False


class ResourcePayload(DiffBaseModel):
    type: ResourceKind
    status: ResourceStatus
    name: str
    namespace: str | None = None
    compiled: ClassPayload | None = Field(default=None, alias="class")
    remote: RemotePayload | None = None

    @model_validator(mode="after")
    def _check_shape(self) -> ResourcePayload:
        if self.type != "namespace" and not self.namespace:
            raise ValueError(f"{self.type} {self.name!r} requires a namespace")
        needs_local = self.status in ("created", "updated") and self.type != "namespace"
        if needs_local and self.compiled is None:
            raise ValueError(f"{self.status} {self.type} {self.name!r} requires a class")
        if self.status in ("updated", "synced") and self.remote is None:
            raise ValueError(f"{self.status} {self.type} {self.name!r} requires a remote state")
        if self.type == "namespace" and self.status == "updated":
            raise ValueError(f"namespace {self.name!r} cannot be updated")
        return self


class WorldPayload(DiffBaseModel):
    status: WorldState
    compiled: ClassPayload | None = Field(default=None, alias="class")

    @model_validator(mode="after")
    def _check_class(self) -> WorldPayload:
        if self.status == "new_version" and self.compiled is None:
            raise ValueError("a new world version requires a class")
        return self


class DiffDocument(DiffBaseModel):
    world: WorldPayload
    resources: list[ResourcePayload] = Field(default_factory=list)
