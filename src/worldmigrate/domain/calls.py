"""Abstract contract calls emitted by the migration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from .felt import bytearray_to_felts, felt_to_hex

if TYPE_CHECKING:
    from collections.abc import Sequence

UDC_ADDRESS: Final[int] = 0x041A78E741E5AF2FEC34B695679BC6891742439F7AFB8484ECD7766661AD02BF


@dataclass(frozen=True, slots=True)
class Call:
    """One entrypoint invocation; the submitter resolves the entrypoint selector."""

    to: int
    entrypoint: str
    calldata: tuple[int, ...] = ()

    def describe(self) -> str:
        return f"{self.entrypoint}@{felt_to_hex(self.to)}"


def udc_deploy_call(
    *,
    class_hash: int,
    salt: int,
    constructor_calldata: Sequence[int],
    unique: bool,
) -> Call:
    return Call(
        to=UDC_ADDRESS,
        entrypoint="deployContract",
        calldata=(
            class_hash,
            salt,
            int(unique),
            len(constructor_calldata),
            *constructor_calldata,
        ),
    )


@dataclass(frozen=True, slots=True)
class WorldContract:
    """Builds calls against the world contract at ``address``."""

    address: int

    def register_namespace_call(self, namespace: str) -> Call:
        return self._call("register_namespace", *bytearray_to_felts(namespace))

    def register_contract_call(self, *, selector: int, namespace: str, class_hash: int) -> Call:
        return self._call("register_contract", selector, *bytearray_to_felts(namespace), class_hash)

    def register_model_call(self, *, namespace: str, class_hash: int) -> Call:
        return self._call("register_model", *bytearray_to_felts(namespace), class_hash)

    def register_event_call(self, *, namespace: str, class_hash: int) -> Call:
        return self._call("register_event", *bytearray_to_felts(namespace), class_hash)

    def upgrade_contract_call(self, *, namespace: str, class_hash: int) -> Call:
        return self._call("upgrade_contract", *bytearray_to_felts(namespace), class_hash)

    def upgrade_model_call(self, *, namespace: str, class_hash: int) -> Call:
        return self._call("upgrade_model", *bytearray_to_felts(namespace), class_hash)

    def upgrade_event_call(self, *, namespace: str, class_hash: int) -> Call:
        return self._call("upgrade_event", *bytearray_to_felts(namespace), class_hash)

    def grant_writer_call(self, *, resource: int, grantee: int) -> Call:
        return self._call("grant_writer", resource, grantee)

    def grant_owner_call(self, *, resource: int, grantee: int) -> Call:
        return self._call("grant_owner", resource, grantee)

    def init_contract_call(self, *, selector: int, init_calldata: Sequence[int]) -> Call:
        return self._call("init_contract", selector, len(init_calldata), *init_calldata)

    def _call(self, entrypoint: str, *calldata: int) -> Call:
        return Call(to=self.address, entrypoint=entrypoint, calldata=calldata)
