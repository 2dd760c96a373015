"""
Minimal script that creates a payment, waits for the payer and captures it.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Iterable, Tuple

from yookassa_checkout import (
    CheckoutError,
    ConfigError,
    PaymentStatus,
    create_checkout_client,
    load_checkout_config,
)


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return {key: value for key, value in pairs}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create and capture a YooKassa payment")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing YOOKASSA_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--amount", default="100.00", help="Amount in RUB")
    parser.add_argument("--description", default="Order #1")
    parser.add_argument(
        "--return-url",
        default="https://example.com/return",
        help="Where YooKassa sends the payer after confirmation",
    )
    parser.add_argument(
        "--poll-seconds",
        type=float,
        default=5.0,
        help="Interval between status checks while waiting for the payer",
    )
    parser.add_argument("--max-polls", type=int, default=60)
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_checkout_config(
            env_file=args.env_file,
            overrides=_build_overrides(args.set or ()),
        )
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_checkout_client(config)
    payload = {
        "amount": {"value": args.amount, "currency": "RUB"},
        "capture": False,
        "confirmation": {"type": "redirect", "return_url": args.return_url},
        "description": args.description,
    }

    try:
        payment = client.create_payment(payload)
    except CheckoutError as exc:
        logging.error("Payment creation failed: %s", exc.message)
        return 1

    confirmation_url = payment.raw.get("confirmation", {}).get("confirmation_url")
    logging.info("Payment %s created; send the payer to %s", payment.id, confirmation_url)

    for _ in range(args.max_polls):
        if payment.status is not PaymentStatus.PENDING:
            break
        time.sleep(args.poll_seconds)
        try:
            payment = client.get_payment(payment.id)
        except CheckoutError as exc:
            logging.error("Status check for payment %s failed: %s", payment.id, exc.message)
            return 1

    if payment.status is not PaymentStatus.WAITING_FOR_CAPTURE:
        logging.error("Payment %s ended in status %s", payment.id, payment.status.value)
        return 1

    # One key for the whole capture so a retried run cannot capture twice.
    capture_key = f"capture-{payment.id}"
    try:
        payment = client.capture_payment(payment.id, idempotence_key=capture_key)
    except CheckoutError as exc:
        logging.error("Capture failed: %s", exc.message)
        return 1

    logging.info("Payment %s is %s", payment.id, payment.status.value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
