"""Profile configuration loaded from a project's TOML profile file."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError, MissingConfigurationError

MAX_SEED_LENGTH = 31


class ProfileBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class WorldSection(ProfileBaseModel):
    name: str | None = None
    seed: str
    address: int | None = None

    @field_validator("seed")
    @classmethod
    def _validate_seed(cls, value: str) -> str:
        if not value:
            raise ValueError("seed must not be empty")
        if len(value) > MAX_SEED_LENGTH or not value.isascii():
            raise ValueError(f"seed must be at most {MAX_SEED_LENGTH} ASCII characters")
        return value

    @field_validator("address", mode="before")
    @classmethod
    def _parse_address(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            return int(stripped, 16) if stripped.lower().startswith("0x") else int(stripped)
        return value


class MigrationSection(ProfileBaseModel):
    disable_multicall: bool = False


def _stringify_values(value: object) -> object:
    if isinstance(value, Mapping):
        mapping = cast(Mapping[str, object], value)
        return {
            key: [str(item) for item in cast(list[object], items)]
            if isinstance(items, list)
            else items
            for key, items in mapping.items()
        }
    return value


class ProfileConfig(ProfileBaseModel):
    """Deployment profile: world identity, migration switches and permissions.

    ``writers`` and ``owners`` map a target tag (a namespace or a namespaced
    resource) to the tags of the contracts receiving the permission.
    """

    world: WorldSection
    migration: MigrationSection = Field(default_factory=MigrationSection)
    init_call_args: dict[str, list[str]] = Field(default_factory=dict)
    writers: dict[str, list[str]] = Field(default_factory=dict)
    owners: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("init_call_args", mode="before")
    @classmethod
    def _normalize_init_call_args(cls, value: object) -> object:
        return _stringify_values(value)

    @property
    def use_multicall(self) -> bool:
        return not self.migration.disable_multicall

    def with_multicall_disabled(self) -> ProfileConfig:
        return self.model_copy(update={"migration": MigrationSection(disable_multicall=True)})


def load_profile_config(path: Path | str) -> ProfileConfig:
    """Read and validate the profile at ``path``."""

    profile_path = Path(path)
    try:
        with profile_path.open("rb") as handle:
            payload = tomllib.load(handle)
    except FileNotFoundError as exc:
        raise MissingConfigurationError(f"Profile file not found: {profile_path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {profile_path}: {exc}") from exc

    try:
        return ProfileConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid profile {profile_path}: {exc}") from exc
