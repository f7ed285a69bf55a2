"""
Command-line interface for exercising the Monnify transaction APIs.
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Iterable, Sequence, Tuple

import requests

from .api import create_monnify_client
from .core.config import load_monnify_config
from .core.errors import ConfigError, MonnifyFailedRequestError
from .core.models import PaymentMethod
from .core.notifications import calculate_transaction_hash, verify_transaction_hash


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _key_value(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Values must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Key must not be empty")
    return key, val


def _collect_pairs(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    collected: dict[str, str] = {}
    for key, value in pairs:
        collected[key] = value
    return collected


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monnify-payments",
        description="Call Monnify transaction endpoints from the command line",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing MONNIFY_* settings (default: .env)",
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
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    status = commands.add_parser("status", help="Get the status of a transaction")
    status.add_argument("reference", help="Monnify transactionReference")

    search = commands.add_parser("search", help="Search the merchant's transactions")
    search.add_argument(
        "--param",
        action="append",
        type=_key_value,
        metavar="KEY=VALUE",
        default=None,
        help="Query parameter such as page=0 or paymentReference=REF1",
    )

    init = commands.add_parser("init", help="Initialize a checkout transaction")
    init.add_argument("--amount", required=True)
    init.add_argument("--customer-name", required=True)
    init.add_argument("--customer-email", required=True)
    init.add_argument("--reference", required=True, help="Merchant paymentReference")
    init.add_argument("--description", required=True)
    init.add_argument("--redirect-url", required=True)
    init.add_argument(
        "--payment-method",
        action="append",
        choices=[method.value for method in PaymentMethod],
        default=None,
        help="Restrict checkout to this method (repeatable)",
    )
    init.add_argument("--currency", help="Override MONNIFY_DEFAULT_CURRENCY_CODE")

    transfer = commands.add_parser(
        "bank-transfer", help="Get account details for paying by bank transfer"
    )
    transfer.add_argument("reference", help="Monnify transactionReference")
    transfer.add_argument("bank_code")

    digest = commands.add_parser(
        "hash", help="Compute or check a notification's transactionHash"
    )
    digest.add_argument("--payment-reference", required=True)
    digest.add_argument("--amount-paid", required=True)
    digest.add_argument("--paid-on", required=True, help="dd/mm/yyyy hh:mm:ss")
    digest.add_argument("--transaction-reference", required=True)
    digest.add_argument("--expected", help="Hash received in the notification")
    return parser


def _run_command(args: argparse.Namespace, client: Any) -> Any:
    if args.command == "status":
        return client.get_transaction_status(args.reference)
    if args.command == "search":
        return client.search_transactions(_collect_pairs(args.param or ()))
    if args.command == "init":
        return client.initialize_transaction(
            amount=args.amount,
            customer_name=args.customer_name,
            customer_email=args.customer_email,
            payment_reference=args.reference,
            payment_description=args.description,
            redirect_url=args.redirect_url,
            payment_methods=args.payment_method,
            currency_code=args.currency,
        )
    if args.command == "bank-transfer":
        return client.pay_with_bank_transfer(args.reference, args.bank_code)
    raise ValueError(f"Unknown command {args.command!r}")


def _run_hash(args: argparse.Namespace, secret_key: str) -> int:
    fields = (
        secret_key,
        args.payment_reference,
        args.amount_paid,
        args.paid_on,
        args.transaction_reference,
    )
    if args.expected is None:
        print(calculate_transaction_hash(*fields))
        return 0

    if verify_transaction_hash(args.expected, *fields):
        logging.info("Notification hash matches")
        return 0
    logging.error("Notification hash does not match; do not trust this notification")
    return 1


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_pairs(args.set or ())

    try:
        config = load_monnify_config(env_file=args.env_file, overrides=overrides)
    except (ConfigError, ValueError) as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    if args.command == "hash":
        return _run_hash(args, config.credentials.secret_key)

    client = create_monnify_client(config=config, session=requests.Session())
    try:
        result = _run_command(args, client)
    except MonnifyFailedRequestError as exc:
        logging.error("Monnify request failed [%s]: %s", exc.code, exc.message)
        return 1
    except ValueError as exc:
        logging.error("Invalid request: %s", exc)
        return 1

    _print_json(result)
    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
