from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from worldmigrate.config import (
    ConfigurationError,
    MissingConfigurationError,
    TxnConfig,
    get_account_config,
    get_txn_config,
    load_profile_config,
    require_env_var,
    require_env_vars,
)

if TYPE_CHECKING:
    from pathlib import Path

PROFILE = """
[world]
name = "Example"
seed = "example"
address = "0x1234"

[migration]
disable_multicall = true

[init_call_args]
"ns-Actions" = ["0x1", 2]

[writers]
"ns" = ["ns-Actions"]

[owners]
"ns-Actions" = ["ns-Admin"]
"""


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", " value ")

    result = require_env_vars(["EXAMPLE_VAR"])

    assert result["EXAMPLE_VAR"] == "value"


def test_require_env_vars_raises_when_any_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_VAR", raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_VAR"])

    assert "MISSING_VAR" in str(exc.value)


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


def test_account_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STARKNET_RPC_URL", "http://localhost:5050")
    monkeypatch.setenv("STARKNET_ACCOUNT_ADDRESS", "0xACC")
    monkeypatch.setenv("STARKNET_PRIVATE_KEY", "1234")

    config = get_account_config()

    assert config.rpc_url == "http://localhost:5050"
    assert config.address == 0xACC
    assert config.private_key == 1234
    assert "1234" not in repr(config)


def test_account_config_rejects_malformed_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STARKNET_RPC_URL", "http://localhost:5050")
    monkeypatch.setenv("STARKNET_ACCOUNT_ADDRESS", "not-an-address")
    monkeypatch.setenv("STARKNET_PRIVATE_KEY", "0x1")

    with pytest.raises(ConfigurationError):
        get_account_config()


def test_account_config_requires_every_variable() -> None:
    with pytest.raises(MissingConfigurationError) as exc:
        get_account_config()

    assert "STARKNET_PRIVATE_KEY" in str(exc.value)


def test_txn_config_validation() -> None:
    assert get_txn_config(wait=False, receipt=True) == TxnConfig(wait=False, receipt=True)
    with pytest.raises(ValueError):
        TxnConfig(check_interval_seconds=0)
    with pytest.raises(ValueError):
        TxnConfig(max_checks=0)


def test_load_profile(tmp_path: Path) -> None:
    path = tmp_path / "profile.toml"
    path.write_text(PROFILE, encoding="utf-8")

    profile = load_profile_config(path)

    assert profile.world.seed == "example"
    assert profile.world.address == 0x1234
    assert not profile.use_multicall
    assert profile.init_call_args == {"ns-Actions": ["0x1", "2"]}
    assert profile.writers == {"ns": ["ns-Actions"]}
    assert profile.owners == {"ns-Actions": ["ns-Admin"]}


def test_profile_defaults(tmp_path: Path) -> None:
    path = tmp_path / "profile.toml"
    path.write_text('[world]\nseed = "example"\n', encoding="utf-8")

    profile = load_profile_config(path)

    assert profile.world.address is None
    assert profile.use_multicall
    assert not profile.with_multicall_disabled().use_multicall
    assert profile.writers == {}


def test_missing_profile_is_reported(tmp_path: Path) -> None:
    with pytest.raises(MissingConfigurationError):
        load_profile_config(tmp_path / "absent.toml")


@pytest.mark.parametrize(
    "content",
    [
        "[world\n",
        "[migration]\ndisable_multicall = true\n",
        '[world]\nseed = ""\n',
        '[world]\nseed = "' + "s" * 32 + '"\n',
    ],
)
def test_invalid_profile_is_reported(tmp_path: Path, content: str) -> None:
    path = tmp_path / "profile.toml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_profile_config(path)
