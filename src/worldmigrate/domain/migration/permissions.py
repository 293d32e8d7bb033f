"""Reconciliation of local permission grants against the world."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .errors import OrphanSelectorAddressError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from worldmigrate.domain.calls import Call, WorldContract
    from worldmigrate.domain.diff import LocalPermissions, RemotePermissions


class PermissionKind(StrEnum):
    WRITER = "writer"
    OWNER = "owner"


@dataclass(frozen=True, slots=True, kw_only=True)
class Grant:
    """A permission missing on-chain."""

    kind: PermissionKind
    target_selector: int
    target_tag: str
    grantee_tag: str
    grantee_address: int

    def to_call(self, world: WorldContract) -> Call:
        if self.kind is PermissionKind.WRITER:
            return world.grant_writer_call(
                resource=self.target_selector, grantee=self.grantee_address
            )
        return world.grant_owner_call(resource=self.target_selector, grantee=self.grantee_address)


def missing_grants(
    local: LocalPermissions,
    remote: RemotePermissions,
    addresses: Mapping[int, int],
    *,
    kind: PermissionKind,
) -> list[Grant]:
    """Grants declared in ``local`` whose grantee address is absent remotely.

    ``addresses`` resolves grantee selectors to contract addresses. Remote
    grants without a local counterpart are left untouched.
    """

    grants: list[Grant] = []
    for target_selector, permission in local.items():
        granted = remote.get(target_selector, frozenset[int]())
        for grantee_selector, grantee_tag in permission.grantees.items():
            grantee_address = addresses.get(grantee_selector)
            if grantee_address is None:
                raise OrphanSelectorAddressError(grantee_tag)
            if grantee_address in granted:
                continue
            grants.append(
                Grant(
                    kind=kind,
                    target_selector=target_selector,
                    target_tag=permission.target_tag,
                    grantee_tag=grantee_tag,
                    grantee_address=grantee_address,
                )
            )
    return grants
