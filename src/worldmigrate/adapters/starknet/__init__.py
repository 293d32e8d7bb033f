"""Public interface for the Starknet submitter adapter."""

from __future__ import annotations

from .submitter import StarknetSubmitter, connect_submitter, translate_client_error

__all__ = [
    "StarknetSubmitter",
    "connect_submitter",
    "translate_client_error",
]
