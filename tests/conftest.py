from __future__ import annotations

import pytest

from tests.support.submitters import FakeSubmitter
from worldmigrate.config import TxnConfig


@pytest.fixture
def submitter() -> FakeSubmitter:
    return FakeSubmitter()


@pytest.fixture
def txn_config() -> TxnConfig:
    return TxnConfig(check_interval_seconds=0.01, max_checks=3)


@pytest.fixture(autouse=True)
def _clear_account_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("STARKNET_RPC_URL", "STARKNET_ACCOUNT_ADDRESS", "STARKNET_PRIVATE_KEY"):
        monkeypatch.delenv(name, raising=False)
