from __future__ import annotations

import argparse
import logging
import sys
from datetime import UTC, datetime
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from sitepass.app import create_grants, reconcile_access
from sitepass.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Synchronise LinkSafe compliance into Kisi group links"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "reconcile",
        help="Reconcile Kisi group links against LinkSafe compliance",
    )

    grant = subparsers.add_parser("grant", help="Create group links for email addresses")
    grant.add_argument(
        "--email",
        dest="emails",
        action="append",
        required=True,
        help="Email address to grant access to (repeatable)",
    )
    grant.add_argument(
        "--valid-from",
        type=str,
        help="ISO-8601 timestamp (UTC) from which the link is valid",
    )
    grant.add_argument(
        "--valid-until",
        type=str,
        help="ISO-8601 timestamp (UTC) until which the link is valid",
    )

    return parser.parse_args(list(argv))


def _parse_iso_datetime(value: str) -> datetime:
    try:
        normalized = value.strip()
        if normalized.endswith("Z"):
            normalized = normalized[:-1] + "+00:00"
        dt = datetime.fromisoformat(normalized)
    except ValueError as exc:
        raise ValueError(f"Invalid ISO timestamp: {value}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def _grant_window(args: argparse.Namespace) -> tuple[datetime | None, datetime | None]:
    valid_from = _parse_iso_datetime(args.valid_from) if args.valid_from else None
    valid_until = _parse_iso_datetime(args.valid_until) if args.valid_until else None
    if valid_from and valid_until and valid_from > valid_until:
        raise ValueError("--valid-from must be before --valid-until")
    return valid_from, valid_until


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        valid_from, valid_until = (None, None)
        if parsed_args.command == "grant":
            valid_from, valid_until = _grant_window(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            result = reconcile_access()
            log.info(result.summary())
        elif parsed_args.command == "grant":
            created = create_grants(
                parsed_args.emails,
                valid_from=valid_from,
                valid_until=valid_until,
            )
            log.info("Created %s of %s group links", sum(1 for c in created if c), len(created))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(2)
    except Exception:
        log.exception("An error occurred while executing the synchronisation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
