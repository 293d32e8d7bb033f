from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import TYPE_CHECKING, cast

import pytest
from starknet_py.hash.selector import get_selector_from_name
from starknet_py.net.client_errors import ClientError
from starknet_py.transaction_errors import TransactionNotReceivedError
from starknet_py.transaction_errors import TransactionRevertedError as StarknetRevertedError

from tests.support.worlds import make_class
from worldmigrate.adapters.starknet import StarknetSubmitter, translate_client_error
from worldmigrate.config import TxnConfig
from worldmigrate.domain.calls import Call
from worldmigrate.domain.ports.submitter import (
    ClassAlreadyDeclaredError,
    SigningError,
    Submitter,
    TransactionError,
    TransactionRevertedError,
    TransactionStatusUnknownError,
)

if TYPE_CHECKING:
    from starknet_py.net.account.account import Account
    from starknet_py.net.client_models import Call as StarknetCall


@dataclass
class FakeClient:
    class_hashes: dict[int, int] = field(default_factory=dict[int, int])
    declare_error: ClientError | None = None
    wait_error: Exception | None = None
    declared: list[object] = field(default_factory=list[object])
    waits: list[tuple[int, float, int]] = field(default_factory=list[tuple[int, float, int]])

    async def declare(self, transaction: object) -> SimpleNamespace:
        if self.declare_error is not None:
            raise self.declare_error
        self.declared.append(transaction)
        return SimpleNamespace(transaction_hash=0x11, class_hash=0x22)

    async def wait_for_tx(self, tx_hash: int, check_interval: float, retries: int) -> None:
        self.waits.append((tx_hash, check_interval, retries))
        if self.wait_error is not None:
            raise self.wait_error

    async def get_class_hash_at(self, contract_address: int) -> int:
        if contract_address not in self.class_hashes:
            raise ClientError(message="Contract not found", code=20)
        return self.class_hashes[contract_address]


@dataclass
class FakeAccount:
    client: FakeClient = field(default_factory=FakeClient)
    address: int = 0xACC
    execute_error: ClientError | None = None
    signed: list[dict[str, object]] = field(default_factory=list[dict[str, object]])
    executed: list[list[StarknetCall]] = field(default_factory=list[list["StarknetCall"]])

    async def sign_declare_v3(self, **kwargs: object) -> str:
        self.signed.append(kwargs)
        return "signed-declare"

    async def execute_v3(self, calls: list[StarknetCall], auto_estimate: bool) -> SimpleNamespace:
        assert auto_estimate
        if self.execute_error is not None:
            raise self.execute_error
        self.executed.append(calls)
        return SimpleNamespace(transaction_hash=0x33)


def _submitter(account: FakeAccount) -> StarknetSubmitter:
    return StarknetSubmitter(
        account=cast("Account", account),
        txn_config=TxnConfig(check_interval_seconds=0.5, max_checks=7),
    )


def test_submitter_satisfies_port() -> None:
    assert isinstance(_submitter(FakeAccount()), Submitter)


def test_declare_sends_signed_class() -> None:
    account = FakeAccount()
    compiled = make_class(1)

    result = asyncio.run(_submitter(account).declare(compiled))

    assert result.transaction_hash == 0x11
    assert result.class_hash == 0x22
    (signed,) = account.signed
    assert signed["compiled_class_hash"] == compiled.casm_class_hash
    assert json.loads(cast("str", signed["compiled_contract"])) == dict(compiled.artifact)
    assert signed["auto_estimate"] is True
    assert account.client.declared == ["signed-declare"]


def test_declare_of_known_class_is_classified() -> None:
    account = FakeAccount(
        client=FakeClient(declare_error=ClientError(message="Class already declared", code=51))
    )

    with pytest.raises(ClassAlreadyDeclaredError):
        asyncio.run(_submitter(account).declare(make_class(1)))


def test_execute_resolves_entrypoint_selectors() -> None:
    account = FakeAccount()
    calls = [Call(to=0x1234, entrypoint="register_namespace", calldata=(0, 1, 2))]

    result = asyncio.run(_submitter(account).execute(calls))

    assert result.transaction_hash == 0x33
    ((sent,),) = account.executed
    assert sent.to_addr == 0x1234
    assert sent.selector == get_selector_from_name("register_namespace")
    assert sent.calldata == [0, 1, 2]


def test_rejected_signature_is_a_signing_error() -> None:
    account = FakeAccount(execute_error=ClientError(message="Account validation failed", code=55))

    with pytest.raises(SigningError):
        asyncio.run(_submitter(account).execute([Call(to=0x1, entrypoint="noop")]))


def test_wait_uses_confirmation_policy() -> None:
    account = FakeAccount()

    asyncio.run(_submitter(account).wait_for_transaction(0x33))

    assert account.client.waits == [(0x33, 0.5, 7)]


def test_reverted_transaction_is_reported() -> None:
    reverted = StarknetRevertedError(message="out of gas")
    account = FakeAccount(client=FakeClient(wait_error=reverted))

    with pytest.raises(TransactionRevertedError) as excinfo:
        asyncio.run(_submitter(account).wait_for_transaction(0x33))

    assert excinfo.value.transaction_hash == 0x33


def test_unreceived_transaction_has_unknown_status() -> None:
    account = FakeAccount(client=FakeClient(wait_error=TransactionNotReceivedError()))

    with pytest.raises(TransactionStatusUnknownError) as excinfo:
        asyncio.run(_submitter(account).wait_for_transaction(0x33))

    assert excinfo.value.transaction_hash == 0x33


def test_class_hash_at_returns_none_for_empty_address() -> None:
    account = FakeAccount(client=FakeClient(class_hashes={0x5: 0x6}))
    submitter = _submitter(account)

    assert asyncio.run(submitter.class_hash_at(0x5)) == 0x6
    assert asyncio.run(submitter.class_hash_at(0x7)) is None


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (ClientError(message="Class already declared", code=51), ClassAlreadyDeclaredError),
        (ClientError(message="Class with hash 0x1 is already declared"), ClassAlreadyDeclaredError),
        (ClientError(message="Invalid signature", code=55), SigningError),
        (ClientError(message="Insufficient balance", code=54), TransactionError),
    ],
)
def test_translate_client_error(error: ClientError, expected: type[TransactionError]) -> None:
    translated = translate_client_error(error)

    assert type(translated) is expected
