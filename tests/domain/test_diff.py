from __future__ import annotations

import pytest

from tests.support.worlds import (
    WORLD_ADDRESS,
    build_diff,
    created_contract,
    created_namespace,
    make_class,
    synced_contract,
    synced_namespace,
)
from worldmigrate.domain.calls import WorldContract
from worldmigrate.domain.diff import (
    WorldDiff,
    WorldNotDeployed,
    WorldSynced,
    local_permissions_from_tags,
)
from worldmigrate.domain.felt import bytearray_to_felts
from worldmigrate.domain.naming import compute_contract_address, compute_selector_from_tag
from worldmigrate.domain.resources import ResourceType


def test_local_permissions_are_keyed_by_selector() -> None:
    permissions = local_permissions_from_tags({"ns": ["ns-Actions", "ns-Actions", "ns-Other"]})

    (permission,) = permissions.values()
    assert compute_selector_from_tag("ns") in permissions
    assert permission.target_tag == "ns"
    assert list(permission.grantees.values()) == ["ns-Actions", "ns-Other"]


def test_namespaces_must_exist_in_resources() -> None:
    with pytest.raises(ValueError):
        WorldDiff(world_status=WorldSynced(), namespaces=(compute_selector_from_tag("ns"),))


def test_namespaces_must_be_namespace_resources() -> None:
    contract = created_contract("ns", "Actions", make_class(1))

    with pytest.raises(ValueError):
        WorldDiff(
            world_status=WorldSynced(),
            namespaces=(contract.selector,),
            resources={contract.selector: contract},
        )


def test_contract_addresses_resolve_new_and_existing_contracts() -> None:
    compiled = make_class(1)
    diff = build_diff(
        created_namespace("ns"),
        created_contract("ns", "Actions", compiled),
        synced_contract("ns", "Other", address=0xA2),
    )

    addresses = diff.contract_addresses(WORLD_ADDRESS)

    actions = compute_selector_from_tag("ns-Actions")
    assert addresses == {
        actions: compute_contract_address(
            world_address=WORLD_ADDRESS, class_hash=compiled.class_hash, selector=actions
        ),
        compute_selector_from_tag("ns-Other"): 0xA2,
    }


def test_remote_permissions_only_cover_deployed_resources() -> None:
    diff = build_diff(
        synced_namespace("ns", writers=[0xA2], owners=[0xA3]),
        created_contract("ns", "Actions", make_class(1)),
    )

    namespace = compute_selector_from_tag("ns")
    assert diff.remote_writers() == {namespace: frozenset({0xA2})}
    assert diff.remote_owners() == {namespace: frozenset({0xA3})}


def test_diff_accessors() -> None:
    diff = build_diff(created_namespace("ns"), created_contract("ns", "Actions", make_class(1)))

    (namespace,) = diff.namespace_diffs()
    assert namespace.resource_type is ResourceType.NAMESPACE
    resource = diff.resource_for_tag("ns-Actions")
    assert resource is not None
    assert resource.resource_type is ResourceType.CONTRACT
    assert diff.resource_for_tag("ns-Missing") is None
    assert not diff.is_synced()


def test_undeployed_world_is_not_synced() -> None:
    assert not build_diff(world_status=WorldNotDeployed()).is_synced()
    assert build_diff().is_synced()


def test_world_calls_encode_namespaces_as_bytearrays() -> None:
    world = WorldContract(WORLD_ADDRESS)

    namespace_call = world.register_namespace_call("ns")
    contract_call = world.register_contract_call(selector=0x5, namespace="ns", class_hash=0x7)
    init_call = world.init_contract_call(selector=0x5, init_calldata=[0x1, 0x2])

    assert namespace_call.to == WORLD_ADDRESS
    assert namespace_call.calldata == tuple(bytearray_to_felts("ns"))
    assert contract_call.calldata == (0x5, *bytearray_to_felts("ns"), 0x7)
    assert init_call.calldata == (0x5, 2, 0x1, 0x2)
