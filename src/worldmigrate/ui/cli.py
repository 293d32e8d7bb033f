from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from worldmigrate.app import migrate_world
from worldmigrate.common import configure_logging
from worldmigrate.config import ConfigurationError, get_txn_config

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)

DEFAULT_PROFILE = "profile.toml"
DEFAULT_DIFF = "diff.json"
EXIT_INTERRUPTED = 130


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Migrate a world to its local definition")
    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate = subparsers.add_parser("migrate", help="Apply a world diff on-chain")
    migrate.add_argument(
        "--diff",
        type=str,
        default=DEFAULT_DIFF,
        help="Path to the diff document (default: %(default)s)",
    )
    migrate.add_argument(
        "--profile",
        type=str,
        default=DEFAULT_PROFILE,
        help="Path to the TOML profile (default: %(default)s)",
    )
    migrate.add_argument(
        "--disable-multicall",
        action="store_true",
        help="Send every call in its own transaction",
    )
    migrate.add_argument(
        "--no-wait",
        action="store_true",
        help="Do not wait for transactions to be accepted",
    )
    migrate.add_argument(
        "--receipt",
        action="store_true",
        help="Log the hash of every confirmed transaction",
    )
    migrate.add_argument(
        "--verbose",
        action="store_true",
        help="Log every emitted call",
    )

    return parser.parse_args(list(argv))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    configure_logging(level=logging.DEBUG if "--verbose" in args_list else logging.INFO)
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        txn_config = None
        if parsed_args.command == "migrate":
            txn_config = get_txn_config(wait=not parsed_args.no_wait, receipt=parsed_args.receipt)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "migrate":
            migrate_world(
                diff_path=parsed_args.diff,
                profile_path=parsed_args.profile,
                txn_config=txn_config,
                disable_multicall=parsed_args.disable_multicall,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except KeyboardInterrupt:
        log.warning("Closed by user (Ctrl+C)")
        sys.exit(EXIT_INTERRUPTED)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during migration")
        sys.exit(1)


def run() -> None:
    """Console entry point.

    Ctrl+C is left to the event loop: it cancels the running migration, which
    still waits for a transaction already sent before exiting.
    """
    load_dotenv()
    main()


if __name__ == "__main__":
    run()
