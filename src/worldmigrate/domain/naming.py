"""Resource naming: tags, selectors and deterministic addresses."""

from __future__ import annotations

from typing import Final

from poseidon_py.poseidon_hash import poseidon_hash_many
from starknet_py.hash.address import compute_address

from .felt import bytearray_to_felts, short_string_to_felt

TAG_SEPARATOR: Final[str] = "-"


def get_tag(namespace: str, name: str) -> str:
    return f"{namespace}{TAG_SEPARATOR}{name}"


def split_tag(tag: str) -> tuple[str, str]:
    """Return ``(namespace, name)`` for a namespaced tag."""

    namespace, separator, name = tag.partition(TAG_SEPARATOR)
    if not separator or not namespace or not name:
        raise ValueError(f"Invalid resource tag: {tag!r}")
    return namespace, name


def is_namespaced_tag(tag: str) -> bool:
    return TAG_SEPARATOR in tag


def compute_bytearray_hash(value: str) -> int:
    return poseidon_hash_many(bytearray_to_felts(value))


def compute_selector_from_names(namespace: str, name: str) -> int:
    return poseidon_hash_many([compute_bytearray_hash(namespace), compute_bytearray_hash(name)])


def compute_selector_from_tag(tag: str) -> int:
    """Selector of a resource tag; a tag without separator names a namespace."""

    if not is_namespaced_tag(tag):
        return compute_bytearray_hash(tag)
    namespace, name = split_tag(tag)
    return compute_selector_from_names(namespace, name)


def world_salt(seed: str) -> int:
    """Salt used to deploy the world, derived from the profile seed."""

    return short_string_to_felt(seed)


def compute_world_address(class_hash: int, seed: str) -> int:
    """Address of a world deployed through the UDC without the ``unique`` flag."""

    return compute_address(
        class_hash=class_hash,
        constructor_calldata=[class_hash],
        salt=world_salt(seed),
        deployer_address=0,
    )


def compute_contract_address(*, world_address: int, class_hash: int, selector: int) -> int:
    """Address of a contract deployed by the world, salted with its selector."""

    return compute_address(
        class_hash=class_hash,
        constructor_calldata=[],
        salt=selector,
        deployer_address=world_address,
    )
