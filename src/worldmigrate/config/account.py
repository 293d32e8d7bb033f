"""Account and node connection values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import require_env_vars
from .errors import ConfigurationError

RPC_URL_VAR = "STARKNET_RPC_URL"
ACCOUNT_ADDRESS_VAR = "STARKNET_ACCOUNT_ADDRESS"
PRIVATE_KEY_VAR = "STARKNET_PRIVATE_KEY"  # noqa: S105


@dataclass(frozen=True)
class AccountConfig:
    """Holds the node URL and the signing account used for migration."""

    rpc_url: str
    address: int
    private_key: int = field(repr=False)


def _parse_hex(name: str, value: str) -> int:
    try:
        return int(value, 16) if value.lower().startswith("0x") else int(value, 10)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid value for {name}") from exc


def get_account_config() -> AccountConfig:
    values = require_env_vars((RPC_URL_VAR, ACCOUNT_ADDRESS_VAR, PRIVATE_KEY_VAR))
    return AccountConfig(
        rpc_url=values[RPC_URL_VAR],
        address=_parse_hex(ACCOUNT_ADDRESS_VAR, values[ACCOUNT_ADDRESS_VAR]),
        private_key=_parse_hex(PRIVATE_KEY_VAR, values[PRIVATE_KEY_VAR]),
    )
