"""Transaction confirmation defaults."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CHECK_INTERVAL_SECONDS = 2.0
DEFAULT_MAX_CHECKS = 500


@dataclass(frozen=True, slots=True)
class TxnConfig:
    """How submitted transactions are confirmed.

    ``wait`` makes every execution step block until the transaction is
    accepted; ``receipt`` additionally logs each confirmed transaction hash.
    """

    wait: bool = True
    receipt: bool = False
    check_interval_seconds: float = DEFAULT_CHECK_INTERVAL_SECONDS
    max_checks: int = DEFAULT_MAX_CHECKS

    def __post_init__(self) -> None:
        if self.check_interval_seconds <= 0:
            raise ValueError("check_interval_seconds must be positive")
        if self.max_checks < 1:
            raise ValueError("max_checks must be at least 1")


def get_txn_config(*, wait: bool = True, receipt: bool = False) -> TxnConfig:
    return TxnConfig(wait=wait, receipt=receipt)
