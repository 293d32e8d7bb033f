"""Submitter backed by a starknet-py account."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from starknet_py.hash.selector import get_selector_from_name
from starknet_py.net.account.account import Account
from starknet_py.net.client_errors import ClientError
from starknet_py.net.client_models import Call as StarknetCall
from starknet_py.net.full_node_client import FullNodeClient
from starknet_py.net.signer.stark_curve_signer import KeyPair
from starknet_py.transaction_errors import (
    TransactionFailedError,
    TransactionRejectedError,
)
from starknet_py.transaction_errors import (
    TransactionRevertedError as StarknetRevertedError,
)

from worldmigrate.config.txn import TxnConfig
from worldmigrate.domain.felt import felt_to_hex
from worldmigrate.domain.ports.submitter import (
    ClassAlreadyDeclaredError,
    SigningError,
    Submitter,
    TransactionError,
    TransactionResult,
    TransactionRevertedError,
    TransactionStatusUnknownError,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from worldmigrate.config.account import AccountConfig
    from worldmigrate.domain.calls import Call
    from worldmigrate.domain.resources import CompiledClass

log = getLogger(__name__)

CONTRACT_NOT_FOUND: Final[int] = 20
CLASS_ALREADY_DECLARED: Final[int] = 51
VALIDATION_FAILURE: Final[int] = 55


def _error_code(exc: ClientError) -> int | None:
    try:
        return int(exc.code) if exc.code is not None else None
    except (TypeError, ValueError):
        return None


def translate_client_error(exc: ClientError) -> TransactionError:
    """Map a node error onto the submitter error hierarchy."""

    code = _error_code(exc)
    message = str(exc)
    if code == CLASS_ALREADY_DECLARED or "already declared" in message.lower():
        return ClassAlreadyDeclaredError(message, code=code)
    if code == VALIDATION_FAILURE:
        return SigningError(message, code=code)
    return TransactionError(message, code=code)


def to_starknet_call(call: Call) -> StarknetCall:
    return StarknetCall(
        to_addr=call.to,
        selector=get_selector_from_name(call.entrypoint),
        calldata=list(call.calldata),
    )


@dataclass(slots=True)
class StarknetSubmitter:
    """Sign and send transactions with ``account``.

    Fees are estimated by the account for every transaction.
    """

    account: Account
    txn_config: TxnConfig = field(default_factory=TxnConfig)

    @property
    def address(self) -> int:
        return self.account.address

    async def declare(self, compiled: CompiledClass) -> TransactionResult:
        try:
            transaction = await self.account.sign_declare_v3(
                compiled_contract=json.dumps(compiled.artifact),
                compiled_class_hash=compiled.casm_class_hash,
                auto_estimate=True,
            )
            response = await self.account.client.declare(transaction=transaction)
        except ClientError as exc:
            raise translate_client_error(exc) from exc

        log.debug(
            "Declare transaction %s sent for class %s",
            felt_to_hex(response.transaction_hash),
            felt_to_hex(compiled.class_hash),
        )
        return TransactionResult(
            transaction_hash=response.transaction_hash,
            class_hash=response.class_hash,
        )

    async def execute(self, calls: Sequence[Call]) -> TransactionResult:
        try:
            response = await self.account.execute_v3(
                calls=[to_starknet_call(call) for call in calls],
                auto_estimate=True,
            )
        except ClientError as exc:
            raise translate_client_error(exc) from exc

        log.debug(
            "Invoke transaction %s sent with %s call(s)",
            felt_to_hex(response.transaction_hash),
            len(calls),
        )
        return TransactionResult(transaction_hash=response.transaction_hash)

    async def wait_for_transaction(self, transaction_hash: int) -> None:
        try:
            await self.account.client.wait_for_tx(
                transaction_hash,
                check_interval=self.txn_config.check_interval_seconds,
                retries=self.txn_config.max_checks,
            )
        except (StarknetRevertedError, TransactionRejectedError) as exc:
            raise TransactionRevertedError(
                str(exc), transaction_hash=transaction_hash
            ) from exc
        except TransactionFailedError as exc:
            raise TransactionStatusUnknownError(
                str(exc), transaction_hash=transaction_hash
            ) from exc
        except ClientError as exc:
            error = translate_client_error(exc)
            error.transaction_hash = transaction_hash
            raise error from exc

    async def class_hash_at(self, address: int) -> int | None:
        try:
            return await self.account.client.get_class_hash_at(contract_address=address)
        except ClientError as exc:
            if _error_code(exc) == CONTRACT_NOT_FOUND:
                return None
            raise translate_client_error(exc) from exc


async def connect_submitter(
    config: AccountConfig,
    *,
    txn_config: TxnConfig | None = None,
) -> StarknetSubmitter:
    """Build a submitter for the account described by ``config``."""

    client = FullNodeClient(node_url=config.rpc_url)
    chain_id = await client.get_chain_id()
    account = Account(
        address=config.address,
        client=client,
        key_pair=KeyPair.from_private_key(config.private_key),
        chain=int(chain_id, 16) if isinstance(chain_id, str) else chain_id,
    )
    log.info("Connected account %s to %s", felt_to_hex(config.address), config.rpc_url)
    return StarknetSubmitter(account=account, txn_config=txn_config or TxnConfig())


if TYPE_CHECKING:
    _submitter_check: type[Submitter] = StarknetSubmitter
