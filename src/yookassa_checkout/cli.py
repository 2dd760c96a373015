"""
Command-line interface for inspecting a YooKassa shop.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, Iterable, Optional, Sequence, TextIO, Tuple

import requests

from .api import create_checkout_client
from .core.client import CheckoutClient
from .core.config import ConfigError, load_checkout_config
from .core.errors import CheckoutError
from .core.filters import RangeFilter
from .core.models import ListResult

_RESOURCES = ("payment", "refund", "receipt")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Expected KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    return {key: value for key, value in pairs}


def _collect_filters(pairs: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """``created_at.gte=X`` becomes a range filter on ``created_at``."""
    filters: Dict[str, Any] = {}
    for key, value in pairs:
        if "." in key:
            name, mode = key.split(".", 1)
            filters[name] = RangeFilter(mode, value)
        else:
            filters[key] = value
    return filters


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yookassa-checkout",
        description="Query payments, refunds and receipts of a YooKassa shop",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing YOOKASSA_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Python logging level (default: WARNING)",
    )

    resources = parser.add_subparsers(dest="resource", required=True)
    for resource in _RESOURCES:
        resource_parser = resources.add_parser(resource, help=f"{resource} endpoints")
        actions = resource_parser.add_subparsers(dest="action", required=True)

        get_parser = actions.add_parser("get", help=f"Fetch a {resource} by id")
        get_parser.add_argument("id")

        list_parser = actions.add_parser("list", help=f"List {resource}s")
        list_parser.add_argument(
            "--filter",
            action="append",
            type=_key_value,
            metavar="KEY=VALUE",
            default=None,
            help="Filter entry; use KEY.MODE=VALUE for ranges (created_at.gte=...)",
        )

        if resource == "payment":
            cancel_parser = actions.add_parser("cancel", help="Cancel a payment")
            cancel_parser.add_argument("id")
            cancel_parser.add_argument(
                "--idempotence-key",
                default=None,
                help="Reuse a key when retrying a cancel (default: a new UUID)",
            )
    return parser


def _dispatch(client: CheckoutClient, args: argparse.Namespace) -> Any:
    resource, action = args.resource, args.action
    if action == "get":
        return getattr(client, f"get_{resource}")(args.id)
    if action == "list":
        filters = _collect_filters(args.filter or ())
        return getattr(client, f"get_{resource}_list")(filters)
    if resource == "payment" and action == "cancel":
        return client.cancel_payment(args.id, args.idempotence_key)
    raise ValueError(f"Unsupported command: {resource} {action}")


def _render(result: Any) -> Dict[str, Any]:
    if isinstance(result, ListResult):
        return {
            "type": result.type,
            "items": [item.raw for item in result.items],
            "next_cursor": result.next_cursor,
        }
    return result.raw


def run_cli(
    argv: Sequence[str] | None = None,
    *,
    session: Optional[requests.Session] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    out = stdout or sys.stdout

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_checkout_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    with create_checkout_client(config, session=session) as client:
        try:
            result = _dispatch(client, args)
        except CheckoutError as exc:
            logging.error("Request failed: %s", exc.message)
            return 1

    json.dump(_render(result), out, ensure_ascii=False, indent=2)
    out.write("\n")
    return 0


def main() -> None:
    sys.exit(run_cli())
