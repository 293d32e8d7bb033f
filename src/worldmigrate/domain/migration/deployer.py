"""Contract deployment through the universal deployer contract."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from starknet_py.hash.address import compute_address
from starknet_py.hash.utils import pedersen_hash

from worldmigrate.domain.calls import UDC_ADDRESS, udc_deploy_call
from worldmigrate.domain.felt import felt_to_hex
from worldmigrate.domain.ports.submitter import SigningError, TransactionError

from .errors import ContractAlreadyDeployedError, DeploymentError
from .transactions import confirm, settle

if TYPE_CHECKING:
    from collections.abc import Sequence

    from worldmigrate.config.txn import TxnConfig
    from worldmigrate.domain.calls import Call
    from worldmigrate.domain.ports.submitter import Submitter, TransactionResult

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DeployResult:
    address: int
    transaction_hash: int


def compute_udc_address(
    *,
    class_hash: int,
    salt: int,
    constructor_calldata: Sequence[int],
    unique: bool,
    caller_address: int,
) -> int:
    """Address the UDC assigns to a deployment.

    Unique deployments mix the caller into the salt and are attributed to the
    UDC itself; others are attributed to the zero address.
    """

    if unique:
        return compute_address(
            class_hash=class_hash,
            constructor_calldata=constructor_calldata,
            salt=pedersen_hash(caller_address, salt),
            deployer_address=UDC_ADDRESS,
        )
    return compute_address(
        class_hash=class_hash,
        constructor_calldata=constructor_calldata,
        salt=salt,
        deployer_address=0,
    )


@dataclass(slots=True)
class Deployer:
    submitter: Submitter
    txn_config: TxnConfig

    async def deploy_via_udc(
        self,
        *,
        class_hash: int,
        salt: int,
        constructor_calldata: Sequence[int],
        unique: bool = False,
    ) -> DeployResult:
        """Deploy ``class_hash`` at its deterministic address.

        Raises :class:`ContractAlreadyDeployedError` when a contract already
        lives at that address, so callers can treat the deployment as done.
        """

        address = compute_udc_address(
            class_hash=class_hash,
            salt=salt,
            constructor_calldata=constructor_calldata,
            unique=unique,
            caller_address=self.submitter.address,
        )

        existing = await self.submitter.class_hash_at(address)
        if existing is not None:
            raise ContractAlreadyDeployedError(address, existing)

        call = udc_deploy_call(
            class_hash=class_hash,
            salt=salt,
            constructor_calldata=constructor_calldata,
            unique=unique,
        )
        try:
            result = await settle(self._submit(call))
        except SigningError:
            raise
        except TransactionError as exc:
            raise DeploymentError(address) from exc

        log.info(
            "Deployed class %s at %s (tx %s)",
            felt_to_hex(class_hash),
            felt_to_hex(address),
            felt_to_hex(result.transaction_hash),
        )
        return DeployResult(address=address, transaction_hash=result.transaction_hash)

    async def _submit(self, call: Call) -> TransactionResult:
        result = await self.submitter.execute((call,))
        return await confirm(result, submitter=self.submitter, txn_config=self.txn_config)
