"""Application configuration helpers."""

from __future__ import annotations

from .account import AccountConfig, get_account_config
from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .profile import MigrationSection, ProfileConfig, WorldSection, load_profile_config
from .txn import TxnConfig, get_txn_config

__all__ = [
    "AccountConfig",
    "ConfigurationError",
    "MigrationSection",
    "MissingConfigurationError",
    "ProfileConfig",
    "TxnConfig",
    "WorldSection",
    "get_account_config",
    "get_txn_config",
    "load_profile_config",
    "require_env_var",
    "require_env_vars",
]
